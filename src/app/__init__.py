"""
App layer: 데모 서버 (FastAPI).

역할:
- 데모 페이지 (내보내기 폼, 가져오기 업로드)
- 변환 API: src.convert 호출 + 에러 → HTTP 상태 변환
- ⚠️ 변환 로직 없음 (src.convert에 위임)
"""
