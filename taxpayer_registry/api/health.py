from fastapi import APIRouter, Depends
from taxpayer_registry.api.deps import get_registry
from taxpayer_registry.core.registry import TaxPayerRegistry

router = APIRouter()

@router.get("/health")
def health(registry: TaxPayerRegistry = Depends(get_registry)):
    return {"status": "ok", "records": len(registry)}
