"""
Adapters Layer
ポートの実装（スケジューラ、音声出力）
"""
