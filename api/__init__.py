"""
HTTP API

薄薄的一層：只把同步層的結果轉成 HTTP 回應
（None -> 404，InvalidStateTransition -> 400，其他 -> 500）
"""
