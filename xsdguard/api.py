#!/usr/bin/env python3
"""
XSD Gate REST API

A FastAPI front for the validation gate. Schemas live as ``*.xsd`` files
in the configured schema directory and are addressed by file stem.

API Flow:
1. GET /api/v1/schemas - List available schemas
2. POST /api/v1/schemas/{name}/validate - Send raw XML as the request body,
   receive {"schema_name": ..., "valid": true|false}

A document that is malformed or does not conform is a normal "valid": false
answer. Only a schema that cannot be loaded produces an error status
(422, with the schema diagnostics).

Usage:
    uvicorn xsdguard.api:create_app --factory --host 0.0.0.0 --port 8000
"""

from __future__ import annotations

import logging
import re
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from fastapi import FastAPI, HTTPException, Request
from pydantic import BaseModel
from starlette.concurrency import run_in_threadpool

from xsdguard import __version__
from xsdguard.config.settings import GuardConfig, get_config
from xsdguard.engine.runtime import engine_info, ensure_initialized
from xsdguard.errors import SchemaError
from xsdguard.schema.cache import SchemaCache
from xsdguard.schema.compiler import CompiledSchema, load_schema
from xsdguard.validation.validator import validate_buffer

logger = logging.getLogger(__name__)

_SCHEMA_NAME_RE = re.compile(r"^[A-Za-z0-9][A-Za-z0-9_.-]*$")


# ============================================================================
# RESPONSE MODELS
# ============================================================================

class ValidationResponse(BaseModel):
    schema_name: str
    valid: bool


class SchemaList(BaseModel):
    schema_dir: str
    schemas: List[str]


# ============================================================================
# APP FACTORY
# ============================================================================

def create_app(config: Optional[GuardConfig] = None) -> FastAPI:
    """Create the FastAPI application."""
    config = config or get_config()
    schema_dir = Path(config.api.schema_dir)
    cache = SchemaCache(config.cache.max_entries) if config.cache.enabled else None

    app = FastAPI(
        title="XSD Gate API",
        description="Pass/fail validation of XML documents against XSD schemas.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    ensure_initialized(config.engine)

    def resolve_schema(name: str) -> Path:
        if not _SCHEMA_NAME_RE.match(name):
            raise HTTPException(status_code=404, detail="Schema not found")
        schema_path = schema_dir / f"{name}.xsd"
        if not schema_path.is_file():
            raise HTTPException(status_code=404, detail="Schema not found")
        return schema_path

    def get_schema(schema_path: Path) -> CompiledSchema:
        if cache is not None:
            return cache.get(schema_path)
        return load_schema(schema_path)

    # ========================================================================
    # VALIDATION ENDPOINTS
    # ========================================================================

    @app.get("/api/v1/schemas", response_model=SchemaList, tags=["Validation"])
    async def list_schemas():
        """List schema names available for validation."""
        names = sorted(p.stem for p in schema_dir.glob("*.xsd")) if schema_dir.is_dir() else []
        return SchemaList(schema_dir=str(schema_dir), schemas=names)

    @app.post("/api/v1/schemas/{name}/validate", response_model=ValidationResponse, tags=["Validation"])
    async def validate_xml(name: str, request: Request):
        """Validate the raw request body against schema ``name``."""
        schema_path = resolve_schema(name)

        try:
            schema = await run_in_threadpool(get_schema, schema_path)
        except SchemaError as e:
            logger.warning(f"Schema {name} failed to load: {e}")
            raise HTTPException(
                status_code=422,
                detail={
                    "message": str(e),
                    "diagnostics": [str(d) for d in e.diagnostics],
                },
            )

        body = await request.body()
        valid = await run_in_threadpool(validate_buffer, schema, body, config.parser)
        logger.info(f"Validated {len(body)} bytes against {name}: {'PASS' if valid else 'FAIL'}")
        return ValidationResponse(schema_name=name, valid=valid)

    # ========================================================================
    # SYSTEM ENDPOINTS
    # ========================================================================

    @app.get("/api/v1/health", tags=["System"])
    async def health_check():
        """Health check endpoint."""
        return {
            "status": "healthy",
            "timestamp": datetime.now().isoformat(),
            "schema_dir_available": schema_dir.is_dir(),
        }

    @app.get("/api/v1/info", tags=["System"])
    async def get_info():
        """Get API version and engine details."""
        return {
            "name": "xsdguard",
            "version": __version__,
            "engine": engine_info(),
            "config": {
                "schema_dir": str(schema_dir),
                "cache_enabled": cache is not None,
                "max_document_bytes": config.parser.max_document_bytes,
            },
        }

    return app


if __name__ == "__main__":
    import uvicorn
    from xsdguard.logging_utils import setup_logging

    _config = get_config()
    setup_logging(_config.log_level)
    uvicorn.run(create_app(_config), host=_config.api.host, port=_config.api.port)
