"""
服務層

這個 package 包含純計算邏輯，不負責狀態轉換：
- MatchingService：學生與老師的配對評分
- CommissionService：老師抽成等級
- NamingService：ID 與時間戳生成
"""
