"""
API 層

- coins：Coin 查詢（HTTP）
- websocket：即時事件（加入房間、查詢、收集、廣播）
"""
