#!/usr/bin/env python3
"""
Maple CLI - ターミナル上のコンパニオン
Typer を使用した操作ツール（プレゼンテーション層）
"""

import asyncio
from typing import List

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from maple import __version__
from maple.adapters.scheduling import AsyncioScheduler, ManualScheduler
from maple.core.config import get_settings
from maple.core.dependencies import CompanionApp
from maple.core.exceptions import ConfigurationError
from maple.domain.models.companion import CompanionAction, CompanionSnapshot
from maple.domain.models.conversation import ChatSnapshot, Message

app = typer.Typer(
    name="maple",
    help="Maple - ローカルで動く AI コンパニオン",
    add_completion=False,
    rich_markup_mode="rich"
)

console = Console()

ACTION_COMMANDS = {f"/{action.value}": action for action in CompanionAction}


def _build_app(scheduler) -> CompanionApp:
    try:
        return CompanionApp(scheduler=scheduler, settings=get_settings())
    except ConfigurationError as e:
        console.print(f"[red]設定エラー: {e.message}[/red]")
        for detail in e.details.get("errors", []):
            console.print(f"  - {detail}")
        raise typer.Exit(1)


def _parse_actions(actions: List[str]) -> List[CompanionAction]:
    parsed = []
    for action in actions:
        try:
            parsed.append(CompanionAction(action.lower()))
        except ValueError:
            console.print(f"[red]エラー: 不明なアクション '{action}'[/red]")
            console.print("使用可能: " + ", ".join(a.value for a in CompanionAction))
            raise typer.Exit(1)
    return parsed


def _state_panel(snapshot: CompanionSnapshot) -> Panel:
    traits = Table(show_header=True, header_style="bold magenta")
    traits.add_column("特性", style="cyan")
    traits.add_column("値", justify="right", style="yellow")
    for trait, value in snapshot.personality.items():
        traits.add_row(trait.capitalize(), f"{value:.2f}")

    summary = (
        f"[bold]気分:[/bold] {snapshot.mood_text} ({snapshot.mood.value})\n"
        f"[bold]エネルギー:[/bold] {snapshot.energy}%\n"
        f"[bold]アニメーション:[/bold] {snapshot.animation.value}\n"
        f"[bold]アバター:[/bold] {snapshot.avatar}\n"
        f"[bold]最終インタラクション:[/bold] {snapshot.last_interaction:%Y-%m-%d %H:%M:%S}"
    )
    grid = Table.grid(padding=1)
    grid.add_row(summary)
    grid.add_row(traits)
    return Panel(grid, title=f"🍁 {snapshot.name}", border_style="red")


def _print_message(message: Message, companion_name: str) -> None:
    if message.is_user:
        console.print(f"[bold cyan]you[/bold cyan]: {message.content}")
    else:
        console.print(f"[bold red]{companion_name}[/bold red]: {message.content}")


def _speech_printer():
    """新しい発話だけを表示する購読者"""
    last = {"line": None}

    def on_change(snapshot: CompanionSnapshot) -> None:
        if snapshot.is_speaking and snapshot.spoken_line != last["line"]:
            console.print(f"[italic red]{snapshot.name}[/italic red] 🔊 {snapshot.spoken_line}")
        last["line"] = snapshot.spoken_line if snapshot.is_speaking else None

    return on_change


def _reply_printer(app_: CompanionApp):
    """新しいコンパニオンのメッセージだけを表示する購読者"""
    seen = {"count": len(app_.chat.messages)}

    def on_change(snapshot: ChatSnapshot) -> None:
        for message in snapshot.messages[seen["count"]:]:
            if not message.is_user:
                _print_message(message, app_.interaction.name)
        seen["count"] = len(snapshot.messages)

    return on_change


@app.command()
def status():
    """
    コンパニオンの現在状態を表示します
    """
    companion = _build_app(ManualScheduler())
    console.print(_state_panel(companion.interaction.snapshot()))


@app.command()
def interact(
    actions: List[str] = typer.Argument(..., help="アクション: play, feed, chat, rest"),
):
    """
    アクションを順に適用し、すべてのアニメーションが終わるまで待ちます
    """
    parsed = _parse_actions(actions)

    async def run() -> CompanionSnapshot:
        scheduler = AsyncioScheduler()
        companion = _build_app(scheduler)
        companion.interaction.subscribe(_speech_printer())
        for action in parsed:
            companion.interaction.interact(action)
        await scheduler.wait_until_idle()
        return companion.interaction.snapshot()

    console.print(_state_panel(asyncio.run(run())))


@app.command()
def chat(
    messages: List[str] = typer.Argument(..., help="送信するメッセージ"),
):
    """
    メッセージを送り、返信を待って会話ログを表示します
    """

    async def run() -> CompanionApp:
        scheduler = AsyncioScheduler()
        companion = _build_app(scheduler)
        with console.status(f"{companion.interaction.name} is typing..."):
            for text in messages:
                companion.chat.send_message(text)
                await scheduler.wait_until_idle()
        return companion

    companion = asyncio.run(run())
    for message in companion.chat.messages:
        _print_message(message, companion.interaction.name)


@app.command()
def talk():
    """
    対話モード（/play /feed /chat /rest /status /quit）
    """

    async def run() -> None:
        loop = asyncio.get_running_loop()
        scheduler = AsyncioScheduler()
        companion = _build_app(scheduler)
        companion.interaction.subscribe(_speech_printer())
        companion.chat.subscribe(_reply_printer(companion))

        _print_message(companion.chat.messages[0], companion.interaction.name)
        try:
            while True:
                # 入力待ちの間もループ上のタイマーは発火する
                text = await loop.run_in_executor(None, input, "> ")
                command = text.strip().lower()
                if command in ("/quit", "/exit"):
                    break
                if command == "/status":
                    console.print(_state_panel(companion.interaction.snapshot()))
                elif command in ACTION_COMMANDS:
                    companion.interaction.interact(ACTION_COMMANDS[command])
                else:
                    companion.chat.send_message(text)
        except (EOFError, KeyboardInterrupt):
            pass
        finally:
            scheduler.close()

    asyncio.run(run())
    console.print("[dim]またね！ 🍁[/dim]")


@app.command()
def simulate(
    actions: List[str] = typer.Argument(..., help="アクション: play, feed, chat, rest"),
    gap: float = typer.Option(0.5, min=0.0, help="アクション間の仮想秒数"),
):
    """
    仮想時計でアクションを再生し、状態の変化を時刻付きで表示します
    """
    parsed = _parse_actions(actions)
    scheduler = ManualScheduler()
    companion = _build_app(scheduler)

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("t", justify="right", style="cyan")
    table.add_column("mood", style="white")
    table.add_column("energy", justify="right", style="yellow")
    table.add_column("animation", style="green")
    table.add_column("speaking", style="white")

    def record(snapshot: CompanionSnapshot) -> None:
        table.add_row(
            f"{scheduler.elapsed:.2f}",
            snapshot.mood.value,
            str(snapshot.energy),
            snapshot.animation.value,
            "yes" if snapshot.is_speaking else "no",
        )

    companion.interaction.subscribe(record)
    for index, action in enumerate(parsed):
        if index:
            scheduler.advance(gap)
        companion.interaction.interact(action)
    scheduler.run_until_idle()

    console.print(table)
    console.print(_state_panel(companion.interaction.snapshot()))


@app.command()
def version():
    """
    バージョン情報を表示
    """
    console.print(Panel(
        f"[bold red]Maple CLI[/bold red] v{__version__}\n"
        f"🔧 Built with [bold]Typer[/bold]",
        title="バージョン情報"
    ))


def main():
    app()


if __name__ == "__main__":
    main()
