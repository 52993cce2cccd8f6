"""Starlette web server exposing the expression engine over HTTP."""

from calcengine.web_server.web_server import CalcWebServer, EvaluateRequest

__all__ = ["CalcWebServer", "EvaluateRequest"]
