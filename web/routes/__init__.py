"""
API 라우트 패키지

각 기능별 라우터 모듈:
- health: 헬스 체크
- customers: 고객 관리, movement 내역, 외상/결제 등록
- movements: movement 수정/삭제
"""
