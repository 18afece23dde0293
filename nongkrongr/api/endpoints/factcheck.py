"""SumselCekFakta endpoints: news, hoax report tickets, stats and site settings."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from nongkrongr.db.session import get_db
from nongkrongr.schemas.factcheck import (
    DeepfakeRequest,
    DeepfakeResult,
    FactCheckStats,
    NewsCreate,
    NewsOut,
    ReportData,
    SiteSettingsIn,
    SiteSettingsOut,
    TicketOut,
    TicketStatusUpdate,
    VisitorCount,
)
from nongkrongr.services import factcheck as factcheck_service
from nongkrongr.services.llm import llm_service

router = APIRouter(prefix="/factcheck", tags=["factcheck"])


@router.get("/news", response_model=list[NewsOut])
def list_news(db: Session = Depends(get_db)) -> list[NewsOut]:
    return [NewsOut.model_validate(n) for n in factcheck_service.list_news(db)]


@router.post("/news", response_model=NewsOut, status_code=status.HTTP_201_CREATED)
def create_news(payload: NewsCreate, db: Session = Depends(get_db)) -> NewsOut:
    return NewsOut.model_validate(factcheck_service.create_news(db, payload))


@router.get("/news/{news_id}", response_model=NewsOut)
def get_news(news_id: str, db: Session = Depends(get_db)) -> NewsOut:
    return NewsOut.model_validate(factcheck_service.get_news(db, news_id))


@router.put("/news/{news_id}", response_model=NewsOut)
def update_news(news_id: str, payload: NewsCreate, db: Session = Depends(get_db)) -> NewsOut:
    return NewsOut.model_validate(factcheck_service.update_news(db, news_id, payload))


@router.delete("/news/{news_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_news(news_id: str, db: Session = Depends(get_db)) -> None:
    factcheck_service.delete_news(db, news_id)


@router.post("/news/{news_id}/view", response_model=NewsOut)
def view_news(news_id: str, db: Session = Depends(get_db)) -> NewsOut:
    return NewsOut.model_validate(factcheck_service.increment_view(db, news_id))


@router.post("/tickets", response_model=TicketOut, status_code=status.HTTP_201_CREATED)
def create_ticket(payload: ReportData, db: Session = Depends(get_db)) -> TicketOut:
    return TicketOut.model_validate(factcheck_service.create_ticket(db, payload))


@router.get("/tickets", response_model=list[TicketOut])
def list_tickets(db: Session = Depends(get_db)) -> list[TicketOut]:
    return [TicketOut.model_validate(t) for t in factcheck_service.list_tickets(db)]


@router.get("/tickets/{ticket_id}", response_model=TicketOut)
def track_ticket(ticket_id: str, db: Session = Depends(get_db)) -> TicketOut:
    """Ticket lookup for reporters; the id is case-insensitive."""
    return TicketOut.model_validate(factcheck_service.track_ticket(db, ticket_id))


@router.patch("/tickets/{ticket_id}/status", response_model=TicketOut)
def update_ticket_status(ticket_id: str, payload: TicketStatusUpdate, db: Session = Depends(get_db)) -> TicketOut:
    ticket = factcheck_service.update_ticket_status(db, ticket_id, payload.status, payload.note)
    return TicketOut.model_validate(ticket)


@router.delete("/tickets/{ticket_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_ticket(ticket_id: str, db: Session = Depends(get_db)) -> None:
    factcheck_service.delete_ticket(db, ticket_id)


@router.get("/stats", response_model=FactCheckStats)
def stats(db: Session = Depends(get_db)) -> FactCheckStats:
    return factcheck_service.compute_stats(factcheck_service.list_news(db))


@router.get("/site-settings", response_model=SiteSettingsOut)
def get_site_settings(db: Session = Depends(get_db)) -> SiteSettingsOut:
    return SiteSettingsOut.model_validate(factcheck_service.get_site_settings(db))


@router.put("/site-settings", response_model=SiteSettingsOut)
def update_site_settings(payload: SiteSettingsIn, db: Session = Depends(get_db)) -> SiteSettingsOut:
    return SiteSettingsOut.model_validate(factcheck_service.update_site_settings(db, payload))


@router.post("/visitors", response_model=VisitorCount)
def register_visit(new_session: bool = True, db: Session = Depends(get_db)) -> VisitorCount:
    """Clients pass new_session=false on reloads within the same browser session."""
    return VisitorCount(visitor_count=factcheck_service.register_visit(db, new_session))


@router.post("/deepfake", response_model=DeepfakeResult)
def analyze_deepfake(payload: DeepfakeRequest) -> DeepfakeResult:
    return llm_service.analyze_image_for_deepfake(payload.image)
