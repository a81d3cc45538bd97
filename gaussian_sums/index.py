from __future__ import annotations

import logging
from dataclasses import asdict
from datetime import datetime, timezone

from asgiref.sync import sync_to_async
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field, field_validator

from . import config
from .figures import compose_figure, figure_to_base64, series_labels
from .logging_config import setup_logging
from .sampler import DistributionParams, InvalidParameter, SumOfGaussians, draw_sum_of_gaussians
from .utils import reset_shared_generator, shared_generator

setup_logging(config.LOG_LEVEL, config.LOG_FILE)
logger = logging.getLogger(__name__)

app = FastAPI(title="Sums of independent Gaussian variables", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

startup = datetime.now(timezone.utc)

MEAN_LOW, MEAN_HIGH = config.MEAN_RANGE
STD_LOW, STD_HIGH = config.STD_RANGE


class SumRequest(BaseModel):
    mean1: float = Field(config.DEFAULT_MEAN, ge=MEAN_LOW, le=MEAN_HIGH, description="Mean of x₁")
    std1: float = Field(config.DEFAULT_STD, ge=STD_LOW, le=STD_HIGH, description="Standard deviation of x₁")
    mean2: float = Field(config.DEFAULT_MEAN, ge=MEAN_LOW, le=MEAN_HIGH, description="Mean of x₂")
    std2: float = Field(config.DEFAULT_STD, ge=STD_LOW, le=STD_HIGH, description="Standard deviation of x₂")
    sample_count: int = Field(
        config.DEFAULT_SAMPLE_COUNT,
        ge=1,
        le=config.MAX_SAMPLE_COUNT,
        description="Samples drawn per series; a power of ten",
    )
    bins: int | None = Field(
        default=None,
        ge=5,
        le=200,
        description="Optional histogram bin count; GAUSSIAN_SUMS_BINS when omitted",
    )

    @field_validator("sample_count")
    @classmethod
    def _power_of_ten(cls, value: int) -> int:
        allowed = config.allowed_sample_counts()
        if value not in allowed:
            raise ValueError(f"sample_count must be one of {allowed}")
        return value


class HistogramPayload(BaseModel):
    edges: list[float]
    densities: list[float]


class SumResponse(BaseModel):
    plot: str
    histograms: dict[str, HistogramPayload]
    stats: dict[str, dict[str, float]]
    labels: dict[str, str]


class ResetRequest(BaseModel):
    seed: int | None = Field(default=None, ge=0, description="Seed; SEED environment variable when omitted")


@app.get("/")
@app.get("/api")
@app.get("/api/")
async def health_check() -> dict[str, object]:
    uptime = datetime.now(timezone.utc) - startup
    return {
        "message": "Gaussian sums service is running",
        "uptime_seconds": round(uptime.total_seconds(), 2),
    }


@app.get("/defaults")
@app.get("/api/defaults")
async def defaults() -> dict[str, object]:
    return {
        "mean_range": list(config.MEAN_RANGE),
        "std_range": list(config.STD_RANGE),
        "step": config.SLIDER_STEP,
        "sample_counts": config.allowed_sample_counts(),
        "mean": config.DEFAULT_MEAN,
        "std": config.DEFAULT_STD,
        "sample_count": config.DEFAULT_SAMPLE_COUNT,
        "bins": config.DEFAULT_BINS,
    }


def _render(params: DistributionParams, bins: int) -> tuple[SumOfGaussians, dict, str]:
    samples = draw_sum_of_gaussians(params, shared_generator())
    histograms = samples.histograms(bins)
    plot = figure_to_base64(compose_figure(samples, histograms))
    return samples, histograms, plot


@app.post("/sum", response_model=SumResponse)
@app.post("/api/sum", response_model=SumResponse)
async def sum_of_gaussians(payload: SumRequest) -> SumResponse:
    bins = payload.bins if payload.bins is not None else config.DEFAULT_BINS
    logger.info(
        "Rendering N(%s, %s^2) + N(%s, %s^2) with n=%d",
        payload.mean1, payload.std1, payload.mean2, payload.std2, payload.sample_count,
    )
    try:
        params = DistributionParams(
            mean1=payload.mean1,
            std1=payload.std1,
            mean2=payload.mean2,
            std2=payload.std2,
            sample_count=payload.sample_count,
        )
        samples, histograms, plot = await sync_to_async(_render, thread_sensitive=True)(params, bins)
    except InvalidParameter as error:
        raise HTTPException(status_code=422, detail=str(error)) from error
    except Exception as error:
        logger.exception("Failed to render the sum of Gaussians")
        raise HTTPException(status_code=500, detail="Failed to render figure") from error

    return SumResponse(
        plot=plot,
        histograms={
            name: HistogramPayload(edges=hist.edges.tolist(), densities=hist.densities.tolist())
            for name, hist in histograms.items()
        },
        stats={name: asdict(stat) for name, stat in samples.stats().items()},
        labels=series_labels(params),
    )


@app.post("/reset")
@app.post("/api/reset")
async def reset(payload: ResetRequest) -> dict[str, object]:
    reset_shared_generator(payload.seed)
    seed = config.DEFAULT_SEED if payload.seed is None else payload.seed
    logger.info("Shared generator re-seeded with %d", seed)
    return {"seed": seed}
