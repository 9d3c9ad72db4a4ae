# agromet/main.py
from __future__ import annotations

import logging
import os
from datetime import date as _date

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field, field_validator

from .services.advisory import generate_advisories
from .services.irrigation import InvalidArgument, extraterrestrial_radiation, reference_et
from .services.report import build_report, day_of_year
from .services.schemas import (AdvisoryRecord, ForecastDay, IrrigationReport,
                               WeatherSnapshot, check_forecast_order)

logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO").upper())
logger = logging.getLogger(__name__)


# ---------- App & CORS ----------
app = FastAPI(title="Irrigation Advisor", version="1.0")

# Allow multiple origins via env (comma-separated), e.g.
# CORS_ORIGINS=https://your-frontend.vercel.app,http://localhost:8501
_cors = os.getenv("CORS_ORIGINS", "http://localhost:8501,http://127.0.0.1:8501")
origins = [o.strip() for o in _cors.split(",") if o.strip()]
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

DEFAULT_KC = float(os.getenv("DEFAULT_KC", "1.0"))


# ---------- Models ----------
class ET0Req(BaseModel):
    temp_max: float
    temp_min: float
    lat: float = Field(..., ge=-90, le=90)
    day_of_year: int | None = None
    date: _date | None = None


class ET0Resp(BaseModel):
    et0: float
    ra: float
    day_of_year: int


class AdvisoryReq(BaseModel):
    current: WeatherSnapshot
    forecast: list[ForecastDay] = []

    @field_validator("forecast")
    @classmethod
    def _ordered(cls, v):
        return check_forecast_order(v)


class IrrigationAdviceReq(AdvisoryReq):
    lat: float = Field(..., ge=-90, le=90)
    target_date: _date | None = None
    kc: float = Field(DEFAULT_KC, gt=0, le=2)
    eff_rain_factor: float = Field(0.8, ge=0, le=1)
    soil_buffer_mm: float = Field(2.0, ge=0)


# ---------- Routes ----------
@app.get("/health")
def health():
    return {"ok": True, "origins": origins}


@app.post("/api/et0", response_model=ET0Resp)
def et0(body: ET0Req):
    if body.day_of_year is not None:
        doy = body.day_of_year
    else:
        doy = day_of_year(body.date or _date.today())
    try:
        value = reference_et(body.temp_max, body.temp_min, body.lat, doy)
    except InvalidArgument as e:
        raise HTTPException(status_code=400, detail=str(e))
    ra = extraterrestrial_radiation(body.lat, doy)
    return {"et0": value, "ra": round(ra, 3), "day_of_year": doy}


@app.post("/api/advisories", response_model=list[AdvisoryRecord])
def advisories(body: AdvisoryReq):
    return generate_advisories(body.current, body.forecast)


@app.post("/api/irrigation-advice", response_model=IrrigationReport)
def irrigation_advice(body: IrrigationAdviceReq):
    on_date = body.target_date or _date.today()
    try:
        report = build_report(
            body.current, body.forecast, body.lat, on_date, kc=body.kc,
            eff_rain_factor=body.eff_rain_factor, soil_buffer_mm=body.soil_buffer_mm,
        )
    except InvalidArgument as e:
        raise HTTPException(status_code=400, detail=str(e))
    logger.info("irrigation advice lat=%.2f doy=%d et0=%s advisories=%d",
                body.lat, report.day_of_year, report.et0, len(report.advisories))
    return report
