"""
核心同步層

這個 package 包含所有會改變狀態的元件，包括：
- Store：具名 collection 的持久化（唯一碰到資料庫的地方）
- EventBus：process 內的 publish / subscribe
- Manager：Teacher / Room / Request / Message / Notification
- 狀態機：集中管理 Request 的狀態轉換
- Context：composition root
"""
