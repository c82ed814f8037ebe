"""
核心業務邏輯層

這個 package 包含所有核心業務邏輯，包括：
- Registry：靜態房間設定
- Store：房間 Coin 狀態的 key-value 抽象
- Manager：管理 Coin 的生成、收集與過期
- Locks：並發控制工具
"""
