from fastapi import APIRouter, Depends, HTTPException
from typing import List
from .. import schemas
from ..detail_import import import_quote_detail
from ..reconciler import reconcile
from ..repository import QuoteRepository, get_repository

router = APIRouter(prefix="/quotes", tags=["quotes"])


@router.get("/", response_model=List[schemas.QuoteSummary])
def list_quotes(repo: QuoteRepository = Depends(get_repository)):
    return repo.list_quotes()


@router.get("/default-form", response_model=schemas.QuoteFormData)
def default_form(repo: QuoteRepository = Depends(get_repository)):
    """Starting form for a new quote, with derived fields already computed."""
    return reconcile(repo.default_form())


@router.get("/catalog")
def catalog(repo: QuoteRepository = Depends(get_repository)):
    return {
        "product_names": repo.product_names(),
        "finishing_options": repo.finishing_options(),
        "other_quantities": repo.other_quantities(),
    }


@router.get("/{quote_id}", response_model=schemas.QuoteDetail)
def get_quote(quote_id: str, repo: QuoteRepository = Depends(get_repository)):
    detail = repo.get_detail(quote_id)
    if not detail:
        raise HTTPException(status_code=404, detail="Quote not found")
    return detail


@router.post("/{quote_id}/import", response_model=schemas.QuoteFormData)
def import_quote(quote_id: str, form: schemas.QuoteFormData,
                 repo: QuoteRepository = Depends(get_repository)):
    """Load a stored quote into the posted form and recompute derived fields."""
    detail = repo.get_detail(quote_id)
    if not detail:
        raise HTTPException(status_code=404, detail="Quote not found")
    return reconcile(import_quote_detail(detail, form))
