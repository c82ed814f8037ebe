"""
服務層

這個 package 包含純計算邏輯，不負責狀態轉換：
- SpawnService：在房間範圍內隨機生成 Coin
- NamingService：Coin ID 生成邏輯
"""
