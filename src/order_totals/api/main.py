import logging

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from ..config.logging_config import configure_logging
from ..engine import ComputeOptions, compute_breakdown, validate_lines
from .schemas import BreakdownResponse, CalcRequest, TotalsResponse, ValidateRequest, ValidationResponse
from .state import calculator, settings

configure_logging(settings.log_level)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Order Totals API",
    description="Line-item pricing and tax totals for sales documents",
    version="1.0.0"
)

# Enable CORS for frontend development
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _options_for(req: CalcRequest) -> ComputeOptions:
    if req.include_line_level_calculations is None:
        return calculator.options
    return ComputeOptions(include_line_level_calculations=req.include_line_level_calculations)


def _check_strict(req: CalcRequest, lines):
    if not req.strict:
        return
    result = validate_lines(lines)
    if not result.valid:
        raise HTTPException(status_code=422, detail={"errors": result.errors, "warnings": result.warnings})


@app.get("/")
async def root():
    return {"status": "online", "message": "Order Totals API Active"}


@app.post("/calculate", response_model=TotalsResponse)
def calculate_totals(req: CalcRequest):
    lines = req.to_line_items()
    _check_strict(req, lines)
    try:
        totals = calculator.calculate(lines, _options_for(req))
        return totals.to_camel_dict()
    except Exception as e:
        logger.exception("Totals calculation failed")
        raise HTTPException(status_code=500, detail=str(e))


@app.post("/calculate/breakdown", response_model=BreakdownResponse)
def calculate_breakdown(req: CalcRequest):
    lines = req.to_line_items()
    _check_strict(req, lines)
    try:
        return compute_breakdown(lines, _options_for(req)).to_dict()
    except Exception as e:
        logger.exception("Breakdown calculation failed")
        raise HTTPException(status_code=500, detail=str(e))


@app.post("/validate", response_model=ValidationResponse)
def validate(req: ValidateRequest):
    return validate_lines(req.lines).to_dict()


@app.get("/system/status")
async def get_status():
    return {
        "engine_active": True,
        "include_line_level_calculations": calculator.options.include_line_level_calculations,
        "cache": calculator.stats(),
    }
