"""FastAPI web server for qrsign."""

from datetime import datetime
from typing import Optional

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field

from qrsign import StaticPageReader, Validator, ValidatorConfig, __version__, check_key_pair, parse_message
from qrsign.core.exporter import to_dict
from qrsign.exceptions import KeyNotFoundError, MalformedMessageError


# Request/Response models
class PayloadRequest(BaseModel):
    """Request body carrying scanned QR text."""

    payload: str = Field(..., description="Raw four-line QR text, unmodified")


class VerifyRequest(PayloadRequest):
    """Request body for verification."""

    page_content: Optional[str] = Field(
        default=None,
        description="Content of the key location page. Fetched live when omitted.",
    )
    include_content: bool = Field(
        default=False,
        description="Return the scraped page content in the report",
    )


class KeyPairRequest(BaseModel):
    """Request body for a key pair check."""

    public_key: str = Field(..., description="Base64 public key")
    private_key: str = Field(..., description="Base64 private key seed")


class KeyPairResponse(BaseModel):
    """Key pair check result."""

    valid: bool


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str
    timestamp: str


class ConfigResponse(BaseModel):
    """Current validator configuration with detailed descriptions."""

    headless: bool = Field(
        ...,
        description="Run browser in headless mode when fetching key locations.",
        json_schema_extra={"example": True},
    )
    page_timeout_ms: int = Field(
        ...,
        description="Maximum time in milliseconds to wait for a key location page.",
        json_schema_extra={"example": 30000},
    )
    render_pages: bool = Field(
        ...,
        description="Read the rendered DOM instead of the raw response body.",
        json_schema_extra={"example": False},
    )
    profile_about_url: str = Field(
        ...,
        description="URL template for named profile about pages, with a {profile_id} placeholder.",
        json_schema_extra={"example": "https://www.facebook.com/{profile_id}/about"},
    )
    log_level: str = Field(
        ...,
        description="Logging verbosity level. Options: 'DEBUG', 'INFO', 'WARNING', 'ERROR'.",
        json_schema_extra={"example": "INFO", "enum": ["DEBUG", "INFO", "WARNING", "ERROR"]},
    )


app = FastAPI(
    title="qrsign API",
    description="Signed QR claim verifier API",
    version=__version__,
)


@app.get("/health", response_model=HealthResponse, tags=["System"])
def health_check():
    """Check API health status."""
    return HealthResponse(
        status="healthy",
        version=__version__,
        timestamp=datetime.now().isoformat(),
    )


@app.get("/api/config", response_model=ConfigResponse, tags=["System"])
def get_default_config():
    """
    Get default validator configuration.

    **Configuration can be set via environment variables** with the `QRSIGN_` prefix:
    - `QRSIGN_HEADLESS=false`
    - `QRSIGN_PAGE_TIMEOUT_MS=60000`
    """
    config = ValidatorConfig()
    return ConfigResponse(
        headless=config.headless,
        page_timeout_ms=config.page_timeout_ms,
        render_pages=config.render_pages,
        profile_about_url=config.profile_about_url,
        log_level=config.log_level,
    )


@app.post("/api/parse", tags=["Messages"])
def parse_post(request: PayloadRequest):
    """Parse scanned QR text into its fields."""
    try:
        signed = parse_message(request.payload)
    except MalformedMessageError as e:
        raise HTTPException(status_code=422, detail=f"Malformed message: {e}")
    return signed.model_dump(mode="json")


@app.post("/api/verify", tags=["Messages"])
def verify_post(request: VerifyRequest):
    """
    Verify scanned QR text against the key at its declared location.

    A bad signature is a normal response with `is_well_signed` false.
    """
    reader = StaticPageReader(request.page_content) if request.page_content is not None else None
    validator = Validator(reader=reader, config=ValidatorConfig())

    try:
        report = validator.verify(request.payload)
    except MalformedMessageError as e:
        raise HTTPException(status_code=422, detail=f"Malformed message: {e}")
    except KeyNotFoundError as e:
        raise HTTPException(status_code=404, detail=f"Public key not found: {e}")

    return to_dict(report, include_content=request.include_content)


@app.post("/api/keys/check", response_model=KeyPairResponse, tags=["Keys"])
def check_keys_post(request: KeyPairRequest):
    """Check that a public key belongs to a private key seed."""
    return KeyPairResponse(valid=check_key_pair(request.public_key, request.private_key))


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
