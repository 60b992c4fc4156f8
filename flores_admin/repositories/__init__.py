"""레포지토리 패키지 — 백엔드 REST 호출 계층.

Repository package — Backend REST call layer.
Each repository extends ResourceRepository for the generic CRUD calls and
adds resource-specific paths where the backend has them.
"""
