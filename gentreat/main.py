"""
GenTreat - FastAPI Application

API endpoints for:
- Health checks
- Listing the registered treatment protocols
- Evaluating protocols against a patient's current signs and treatment
"""
from contextlib import asynccontextmanager
from datetime import datetime

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from gentreat import config
from gentreat.models.treatment import (
    EvaluationRequest,
    EvaluationResponse,
    HealthResponse,
    ProtocolListResponse,
)
from gentreat.services.treatment import TreatmentService
from gentreat.utils.exceptions import (
    GenTreatError,
    SignError,
    UnknownOrderError,
    UnknownProtocolError,
)
from gentreat.utils.logging import get_logger

logger = get_logger(__name__)

# ---- Service Singleton ----
_treatment_service = TreatmentService()
START_TIME = datetime.now()


@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.treatment_service = _treatment_service
    logger.info(
        f"API ready to accept requests "
        f"(protocols: {_treatment_service.engine.registered_protocols()})"
    )
    yield
    logger.info("GenTreat API shut down.")


# ---- FastAPI Application ----

app = FastAPI(
    title=config.API_TITLE,
    description="Evaluate escalation protocols against patient signs",
    version=config.API_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _health() -> HealthResponse:
    return HealthResponse(
        status="healthy",
        version=config.API_VERSION,
        timestamp=datetime.now().isoformat(),
        uptime_seconds=(datetime.now() - START_TIME).total_seconds(),
        protocols=_treatment_service.engine.registered_protocols(),
    )


# ---- API Endpoints ----

@app.get("/", response_model=HealthResponse, tags=["Health"])
async def root():
    """API root - health check."""
    return _health()


@app.get("/health", response_model=HealthResponse, tags=["Health"])
async def health_check():
    """Health check endpoint."""
    return _health()


@app.get("/api/v1/protocols", response_model=ProtocolListResponse, tags=["Reference"])
async def list_protocols():
    """List registered protocols with their escalation steps."""
    return ProtocolListResponse(protocols=_treatment_service.describe_protocols())


@app.post("/api/v1/evaluate", response_model=EvaluationResponse, tags=["Evaluation"])
async def evaluate_protocols(request: EvaluationRequest):
    """
    Evaluate the requested protocols in order and return the new treatment set.
    """
    try:
        result = _treatment_service.evaluate(
            patient_id=request.patient_id,
            protocols=request.protocols,
            signs=[s.model_dump() for s in request.signs],
            current_treatment=request.current_treatment,
            include_trace=request.include_trace,
        )
    except UnknownProtocolError as e:
        raise HTTPException(status_code=404, detail=e.to_dict())
    except (SignError, UnknownOrderError) as e:
        raise HTTPException(status_code=400, detail=e.to_dict())
    except GenTreatError as e:
        logger.error(f"Evaluation failed: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=e.to_dict())

    return EvaluationResponse(**result)


# ---- Run with uvicorn ----
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=config.API_HOST, port=config.API_PORT)
