"""서비스 패키지 — 콘솔 동작 계층.

Service package — Console behaviour layer.
Contains the session store, route guard, login flow, the generic resource
controller with its per-resource specialisations, and the per-session
workspace registry. Services call repositories for backend access and
raise the exceptions in ``flores_admin.utils.exceptions``.
"""
