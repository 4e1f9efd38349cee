"""Tenant setup routes: website scraping, company profile and config edits."""

from __future__ import annotations

import logging
from typing import Any, Dict

from fastapi import APIRouter, Body, Depends

from callcoach.analysis.analyzer import TranscriptAnalyzer
from callcoach.errors import ValidationError
from callcoach.scraper.website import scrape_company_website
from callcoach.storage.config_store import ConfigStore
from callcoach.web.deps import get_analyzer, get_config_store, get_scrape_http_client
from callcoach.web.schemas import ApplyCompanyRequest, LoadTranscriptRequest, ScrapeRequest

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/scrape-company")
def scrape_company(
    body: ScrapeRequest,
    analyzer: TranscriptAnalyzer = Depends(get_analyzer),
    http_client=Depends(get_scrape_http_client),
):
    """Scrape a company website for branding and business data."""
    if not body.url:
        raise ValidationError("URL is required")

    logger.info(f"Scraping company website: {body.url}")
    data = scrape_company_website(body.url, analyzer, http_client=http_client)
    return {"success": True, "data": data}


@router.post("/apply-company")
def apply_company(
    body: ApplyCompanyRequest,
    config_store: ConfigStore = Depends(get_config_store),
):
    if not body.companyData:
        raise ValidationError("Company data is required")

    company = config_store.apply_company(body.companyData)
    return {"success": True, "config": company}


@router.get("/current-config")
def current_config(config_store: ConfigStore = Depends(get_config_store)):
    return config_store.load()


@router.post("/load-transcript")
def load_transcript(
    body: LoadTranscriptRequest,
    analyzer: TranscriptAnalyzer = Depends(get_analyzer),
):
    """Mine a pasted transcript for companies, objections and scenario ideas."""
    if not body.transcript:
        raise ValidationError("Transcript is required")

    logger.info("Analyzing transcript for intelligence extraction...")
    intelligence = analyzer.analyze(body.transcript, "extract")
    return {"success": True, "intelligence": intelligence}


@router.post("/update-config")
def update_config(
    updates: Dict[str, Any] = Body(...),
    config_store: ConfigStore = Depends(get_config_store),
):
    return {"success": True, "config": config_store.update(updates)}


@router.post("/reset-config")
def reset_config(config_store: ConfigStore = Depends(get_config_store)):
    return {"success": True, "config": config_store.reset()}
