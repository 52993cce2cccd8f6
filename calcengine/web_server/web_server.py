"""calcengine Web Server - REST endpoints over the expression engine."""

from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, ValidationError
from starlette.applications import Starlette
from starlette.middleware.cors import CORSMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Route

from calcengine import __version__
from calcengine.errors import get_http_status_for_error, map_error_for_web
from calcengine.exceptions import CalcError, InvalidInputError
from calcengine.logger import Logger, session_logger
from calcengine.math_engine import CalculatorEngine, get_engine


class EvaluateRequest(BaseModel):
    """Body of POST /evaluate."""

    model_config = ConfigDict(extra="forbid")

    expression: str
    angle_mode: Optional[Literal["deg", "rad"]] = None


class CalcWebServer:
    """Web server for calcengine - evaluation plus health endpoints."""

    SERVICE_NAME = "calcengine-web"

    def __init__(
        self,
        engine: Optional[CalculatorEngine] = None,
        host: str = "0.0.0.0",
        port: int = 8032,
        logger: Logger = session_logger,
    ):
        self.engine = engine or get_engine()
        self.host = host
        self.port = port
        self.logger = logger
        self.app = self._create_app()

    def _create_app(self) -> Any:
        """Create the Starlette application."""
        routes = [
            Route("/", endpoint=self.root, methods=["GET"]),
            Route("/ping", endpoint=self.ping, methods=["GET"]),
            Route("/health", endpoint=self.health, methods=["GET"]),
            Route("/functions", endpoint=self.functions, methods=["GET"]),
            Route("/evaluate", endpoint=self.evaluate, methods=["POST"]),
        ]

        app = Starlette(debug=False, routes=routes)

        return CORSMiddleware(
            app,
            allow_origins=["*"],
            allow_methods=["GET", "POST"],
            allow_headers=["*"],
        )

    async def root(self, request: Request) -> JSONResponse:
        return JSONResponse({
            "service": self.SERVICE_NAME,
            "status": "ok",
            "message": "calcengine Web Server - POST /evaluate with {\"expression\": ...}",
        })

    async def ping(self, request: Request) -> JSONResponse:
        return JSONResponse({"status": "ok", "service": self.SERVICE_NAME})

    async def health(self, request: Request) -> JSONResponse:
        return JSONResponse({
            "status": "healthy",
            "service": self.SERVICE_NAME,
            "version": __version__,
            "capabilities": self.engine.list_capabilities(),
        })

    async def functions(self, request: Request) -> JSONResponse:
        return JSONResponse(self.engine.expression.describe())

    async def evaluate(self, request: Request) -> JSONResponse:
        """Evaluate an expression from a JSON body."""
        try:
            try:
                payload = await request.json()
            except ValueError as e:
                # JSONDecodeError and UnicodeDecodeError
                raise InvalidInputError(f"Request body is not valid JSON: {e}")
            body = EvaluateRequest.model_validate(payload)
            result = self.engine.evaluate(body.expression, body.angle_mode)
        except (CalcError, ValidationError) as e:
            self.logger.info(
                "Evaluation rejected",
                error_type=type(e).__name__,
                error=str(e),
            )
            return JSONResponse(map_error_for_web(e), status_code=get_http_status_for_error(e))

        return JSONResponse({"status": "success", "data": result.to_dict()})

    def get_app(self) -> Any:
        """Return the ASGI application."""
        return self.app
