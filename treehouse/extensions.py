"""Flask extensions for the application."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

from flask import Flask, current_app, g
from flask_wtf.csrf import CSRFProtect

from treehouse.workflow import AppState, CaptureGuard, ScreenScope, Store


class ScreenTasks:
    """Owns the executor that screen scopes submit their Firebase calls to."""

    def init_app(self, app: Flask) -> None:
        app.extensions["screen_tasks"] = ThreadPoolExecutor(
            max_workers=app.config["TASK_WORKERS"],
            thread_name_prefix="treehouse-screen",
        )
        app.teardown_request(self.close_scope)

    def open_scope(self, uid: str, **initial) -> ScreenScope:
        """Open the scope for the current request, which acts as the screen.

        ``initial`` seeds the screen state beyond the signed-in uid.
        """
        app = current_app._get_current_object()  # type: ignore[attr-defined]
        scope = ScreenScope(
            app.extensions["screen_tasks"],
            Store(AppState(uid=uid, **initial)),
            context=app.app_context,
        )
        g.screen_scope = scope
        return scope

    def close_scope(self, e=None):
        scope = g.pop("screen_scope", None)
        if scope is None:
            return
        cancelled = scope.close()
        if cancelled or scope.dropped:
            current_app.logger.info(
                f"Screen closed with {cancelled} cancelled and "
                f"{scope.dropped} dropped calls."
            )


csrf = CSRFProtect()
screen_tasks = ScreenTasks()
capture_guard = CaptureGuard()
