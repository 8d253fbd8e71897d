# Di dalam file: main.py

import logging
from typing import Dict, List

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from app.rules.registry import get_madhab, heir_catalogue, list_madhabs
from calculator import calculate_inheritance
from config import get_settings
from errors import UnknownMadhabError
from madhab_comparison import compare_all_madhabs
from schemas import (
    CalculationInput,
    CalculationResult,
    ComparisonInput,
    MadhabComparison,
    MadhabProfile,
)

settings = get_settings()
logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.app_title,
    description="API untuk perhitungan waris Islam (fara'id) menurut empat madzhab.",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/")
def read_root():
    """
    Endpoint utama untuk menyapa pengguna.
    """
    return {"message": "Selamat datang di Kalkulator Faraidh", "default_madhab": settings.default_madhab.value}


@app.get("/madhabs", response_model=List[MadhabProfile])
def read_madhabs():
    return list_madhabs()


@app.get("/madhabs/{madhab_id}", response_model=MadhabProfile)
def read_madhab(madhab_id: str):
    try:
        return get_madhab(madhab_id)
    except UnknownMadhabError as exc:
        raise HTTPException(status_code=404, detail=exc.message)


@app.get("/heirs")
def read_heirs() -> Dict[str, Dict[str, str]]:
    """
    Daftar jenis ahli waris beserta nama Inggris dan Arab.
    """
    return heir_catalogue()


@app.post("/calculate", response_model=CalculationResult)
def run_calculation(payload: CalculationInput):
    """
    Endpoint utama untuk menjalankan perhitungan Faraidh.
    Kegagalan perhitungan tetap dikembalikan sebagai hasil (success=false).
    """
    result = calculate_inheritance(payload.madhab, payload.estate, payload.heirs)
    if not result.success:
        logger.info("Calculation failed for %s: %s", payload.madhab.value, result.error)
    return result


@app.post("/calculate/compare", response_model=MadhabComparison)
def run_comparison(payload: ComparisonInput):
    """Endpoint perbandingan hasil keempat madzhab."""
    return compare_all_madhabs(payload.estate, payload.heirs)
