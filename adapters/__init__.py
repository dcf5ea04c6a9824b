"""
어댑터 레이어

외부 자원(DB)과의 연동을 담당.
"""
