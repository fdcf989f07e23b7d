from fastapi import APIRouter, Depends, HTTPException, Query
from typing import List, Optional
import logging
from taxpayer_registry.api.deps import get_registry
from taxpayer_registry.core.errors import DuplicateTaxPayerError
from taxpayer_registry.core.registry import TaxPayerRegistry
from taxpayer_registry.schemas.taxpayer import AddTaxPayerResponse, TaxPayer

router = APIRouter()
logger = logging.getLogger(__name__)

@router.post("/taxpayers", status_code=201, response_model=AddTaxPayerResponse)
def add_taxpayer(taxpayer: TaxPayer, registry: TaxPayerRegistry = Depends(get_registry)):
    """
    Register a taxpayer. Field values are stored as given, empty strings included.
    """
    try:
        registry.insert(taxpayer.tid, taxpayer.first_name, taxpayer.last_name, taxpayer.address)
    except DuplicateTaxPayerError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return AddTaxPayerResponse()

@router.get("/taxpayers", response_model=List[TaxPayer])
def get_taxpayers(registry: TaxPayerRegistry = Depends(get_registry)):
    return registry.list()

@router.get("/taxpayers/search", response_model=Optional[TaxPayer])
def search_taxpayer(tid: str = Query(...), registry: TaxPayerRegistry = Depends(get_registry)):
    """
    Exact, case-sensitive lookup. A miss is a normal answer: 200 with a null body.
    """
    result = registry.lookup(tid)
    if result is None:
        logger.info(f"TaxPayer not found: {tid}")
    return result
