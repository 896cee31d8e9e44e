"""
cli - a9s 명령줄 인터페이스

Click 엔트리포인트, i18n 메시지, Rich 기반 브라우저 화면.
"""
