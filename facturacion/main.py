from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request, status
from fastapi.responses import JSONResponse, RedirectResponse

from .config import CalculationConfig, Settings, ValidationPolicy, get_settings
from .logging import configure_logging
from .models import CalculationResult, InvoiceDraft, ValidationResult
from .services import calculate, validate


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging(get_settings().log_level)
    yield


app = FastAPI(title="Facturacion totals", lifespan=lifespan)


@app.exception_handler(ValueError)
async def value_error_handler(request: Request, exc: ValueError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST, content={"detail": str(exc)}
    )


def get_calculation_config(settings: Settings = Depends(get_settings)) -> CalculationConfig:
    return settings.calculation_config()


def get_validation_policy(settings: Settings = Depends(get_settings)) -> ValidationPolicy:
    return settings.validation_policy()


@app.get("/")
def root() -> RedirectResponse:
    return RedirectResponse(url="/docs", status_code=status.HTTP_307_TEMPORARY_REDIRECT)


@app.get("/health")
def health() -> dict:
    return {"status": "ok"}


@app.get("/settings/calculation", response_model=CalculationConfig)
def calculation_settings(
    config: CalculationConfig = Depends(get_calculation_config),
) -> CalculationConfig:
    return config


@app.post("/invoices/calculate", response_model=CalculationResult)
def calculate_invoice(
    draft: InvoiceDraft,
    config: CalculationConfig = Depends(get_calculation_config),
) -> CalculationResult:
    return calculate(draft, config)


@app.post("/invoices/validate", response_model=ValidationResult)
def validate_draft(
    draft: InvoiceDraft,
    config: CalculationConfig = Depends(get_calculation_config),
    policy: ValidationPolicy = Depends(get_validation_policy),
) -> ValidationResult:
    return validate(draft, config, policy)
