from __future__ import annotations

from datetime import datetime, timezone
import logging
import os

from fastapi import Depends, FastAPI, HTTPException, Query, Request
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from cricket_hub.cache import TTLCache
from cricket_hub.content.feeds import (
    clear_all_caches,
    fetch_all_rankings_for_category,
    fetch_full_post,
    fetch_home_feed,
    fetch_posts,
    fetch_rankings,
    force_refresh_posts,
    preload_critical_data,
)
from cricket_hub.content.publishing import (
    delete_manual_fixture,
    delete_posts,
    delete_ranking,
    invalidate_fixture_caches,
    save_manual_fixture,
    save_post,
    save_ranking,
    set_manual_fixture_status,
    toggle_publish,
)
from cricket_hub.db import Base, SessionLocal, engine, get_db
from cricket_hub.fixtures.countries import flag_for_team
from cricket_hub.fixtures.cricapi_client import CricApiError, fetch_current_matches
from cricket_hub.fixtures.importer import import_live_fixtures
from cricket_hub.fixtures.service import load_fixture_feed
from cricket_hub.log_buffer import get_buffer_handler, install_buffer_handler
from cricket_hub.schemas import (
    FixtureStatusIn,
    ManualFixtureIn,
    PostIdsIn,
    PostIn,
    PostOut,
    PostSummaryOut,
    PostType,
    RankingCategory,
    RankingFormat,
    RankingIn,
    RankingOut,
    SettingsIn,
)
from cricket_hub.settings import (
    SettingsSnapshot,
    encrypt_api_key,
    get_or_create_settings,
    resolve_cricapi_key,
    snapshot_settings,
)
from cricket_hub.store import SqlDocumentStore, StoreConflict, StoreError

app = FastAPI(title="Cricket Hub")
logger = logging.getLogger(__name__)


@app.on_event("startup")
async def startup() -> None:
    install_buffer_handler()
    logger.info("App starting up, creating tables and warming caches")
    Base.metadata.create_all(bind=engine)
    app.state.store = SqlDocumentStore(SessionLocal)
    app.state.cache = TTLCache()
    if os.getenv("PRELOAD_ON_STARTUP", "1") != "0":
        await preload_critical_data(app.state.store, app.state.cache)


def get_store(request: Request) -> SqlDocumentStore:
    return request.app.state.store


def get_cache(request: Request) -> TTLCache:
    return request.app.state.cache


def get_settings_snapshot(db: Session = Depends(get_db)) -> SettingsSnapshot:
    return snapshot_settings(get_or_create_settings(db))


def get_fixture_fetcher():
    return fetch_current_matches


@app.exception_handler(StoreConflict)
async def _store_conflict(request: Request, exc: StoreConflict):
    return JSONResponse(status_code=409, content={"error": "Conflict", "details": str(exc)})


@app.exception_handler(StoreError)
async def _store_error(request: Request, exc: StoreError):
    logger.error("Store error on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=503,
        content={"error": "Content store unavailable", "details": str(exc)},
    )


@app.exception_handler(ValueError)
async def _bad_request(request: Request, exc: ValueError):
    return JSONResponse(status_code=400, content={"error": "Invalid request", "details": str(exc)})


@app.get("/health")
async def health():
    return {"ok": True}


# ------------ Fixtures ------------


@app.get("/api/fixtures")
async def api_fixtures(
    limit: int | None = Query(default=None, ge=1),
    refresh: bool = False,
    store: SqlDocumentStore = Depends(get_store),
    cache: TTLCache = Depends(get_cache),
    settings: SettingsSnapshot = Depends(get_settings_snapshot),
    fetcher=Depends(get_fixture_fetcher),
):
    try:
        feed = await load_fixture_feed(
            store,
            cache,
            resolve_cricapi_key(settings),
            limit=limit,
            refresh=refresh,
            ttl=settings.fixtures_cache_seconds,
            fetcher=fetcher,
        )
    except CricApiError as exc:
        return JSONResponse(
            status_code=502,
            content={"error": "Failed to fetch fixtures", "details": exc.body or str(exc)},
        )
    return feed.model_dump(mode="json")


# ------------ Posts ------------


@app.get("/api/posts", response_model=list[PostSummaryOut])
async def api_posts(
    type: PostType | None = None,
    limit: int = Query(default=20, ge=1, le=100),
    category: str | None = None,
    q: str | None = None,
    store: SqlDocumentStore = Depends(get_store),
    cache: TTLCache = Depends(get_cache),
):
    return await fetch_posts(store, cache, type, limit, category, q)


@app.post("/api/posts/refresh", response_model=list[PostSummaryOut])
async def api_posts_refresh(
    type: PostType | None = None,
    store: SqlDocumentStore = Depends(get_store),
    cache: TTLCache = Depends(get_cache),
):
    return await force_refresh_posts(store, cache, type)


@app.get("/api/posts/{slug}", response_model=PostOut)
async def api_post_detail(
    slug: str,
    store: SqlDocumentStore = Depends(get_store),
    cache: TTLCache = Depends(get_cache),
):
    post = await fetch_full_post(store, cache, slug)
    if post is None:
        raise HTTPException(status_code=404, detail="Post not found")
    return post


@app.get("/api/home-feed", response_model=list[PostSummaryOut])
async def api_home_feed(
    store: SqlDocumentStore = Depends(get_store),
    cache: TTLCache = Depends(get_cache),
):
    return await fetch_home_feed(store, cache)


# ------------ Rankings ------------


@app.get("/api/rankings/{format}/{category}", response_model=list[RankingOut])
async def api_rankings(
    format: RankingFormat,
    category: RankingCategory,
    limit: int = Query(default=10, ge=1, le=100),
    store: SqlDocumentStore = Depends(get_store),
    cache: TTLCache = Depends(get_cache),
):
    return await fetch_rankings(store, cache, format, category, limit)


@app.get("/api/rankings/{category}", response_model=dict[str, list[RankingOut]])
async def api_rankings_for_category(
    category: RankingCategory,
    store: SqlDocumentStore = Depends(get_store),
    cache: TTLCache = Depends(get_cache),
):
    return await fetch_all_rankings_for_category(store, cache, category)


# ------------ Admin: posts ------------


@app.post("/api/admin/posts")
async def api_admin_create_post(
    payload: PostIn,
    store: SqlDocumentStore = Depends(get_store),
    cache: TTLCache = Depends(get_cache),
):
    post = await save_post(store, cache, payload)
    return {"ok": True, "post_id": post.get("id"), "slug": post.get("slug")}


@app.put("/api/admin/posts/{post_id}")
async def api_admin_update_post(
    post_id: str,
    payload: PostIn,
    store: SqlDocumentStore = Depends(get_store),
    cache: TTLCache = Depends(get_cache),
):
    try:
        post = await save_post(store, cache, payload, post_id=post_id)
    except LookupError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return {"ok": True, "post_id": post_id, "slug": post.get("slug")}


@app.post("/api/admin/posts/{post_id}/toggle-publish")
async def api_admin_toggle_publish(
    post_id: str,
    store: SqlDocumentStore = Depends(get_store),
    cache: TTLCache = Depends(get_cache),
):
    try:
        post = await toggle_publish(store, cache, post_id)
    except LookupError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return {"ok": True, "post_id": post_id, "is_published": post["is_published"]}


@app.delete("/api/admin/posts")
async def api_admin_delete_posts(
    payload: PostIdsIn,
    store: SqlDocumentStore = Depends(get_store),
    cache: TTLCache = Depends(get_cache),
):
    deleted = await delete_posts(store, cache, payload.ids)
    return {"ok": True, "deleted": deleted}


# ------------ Admin: rankings ------------


def _with_flag(payload: RankingIn) -> RankingIn:
    if payload.flag_emoji:
        return payload
    return payload.model_copy(update={"flag_emoji": flag_for_team(payload.team_name)})


@app.post("/api/admin/rankings")
async def api_admin_create_ranking(
    payload: RankingIn,
    store: SqlDocumentStore = Depends(get_store),
    cache: TTLCache = Depends(get_cache),
):
    ranking = await save_ranking(store, cache, _with_flag(payload))
    return {"ok": True, "ranking_id": ranking.get("id")}


@app.put("/api/admin/rankings/{ranking_id}")
async def api_admin_update_ranking(
    ranking_id: str,
    payload: RankingIn,
    store: SqlDocumentStore = Depends(get_store),
    cache: TTLCache = Depends(get_cache),
):
    try:
        await save_ranking(store, cache, _with_flag(payload), ranking_id=ranking_id)
    except LookupError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return {"ok": True, "ranking_id": ranking_id}


@app.delete("/api/admin/rankings/{ranking_id}")
async def api_admin_delete_ranking(
    ranking_id: str,
    store: SqlDocumentStore = Depends(get_store),
    cache: TTLCache = Depends(get_cache),
):
    try:
        await delete_ranking(store, cache, ranking_id)
    except LookupError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return {"ok": True}


# ------------ Admin: curated fixtures ------------


@app.post("/api/admin/fixtures")
async def api_admin_create_fixture(
    payload: ManualFixtureIn,
    store: SqlDocumentStore = Depends(get_store),
    cache: TTLCache = Depends(get_cache),
):
    fixture = await save_manual_fixture(store, cache, payload)
    return {"ok": True, "fixture_id": fixture.get("id"), "match_id": fixture.get("match_id")}


@app.put("/api/admin/fixtures/{fixture_id}")
async def api_admin_update_fixture(
    fixture_id: str,
    payload: ManualFixtureIn,
    store: SqlDocumentStore = Depends(get_store),
    cache: TTLCache = Depends(get_cache),
):
    try:
        await save_manual_fixture(store, cache, payload, fixture_id=fixture_id)
    except LookupError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return {"ok": True, "fixture_id": fixture_id}


@app.patch("/api/admin/fixtures/{fixture_id}/status")
async def api_admin_fixture_status(
    fixture_id: str,
    payload: FixtureStatusIn,
    store: SqlDocumentStore = Depends(get_store),
    cache: TTLCache = Depends(get_cache),
):
    try:
        await set_manual_fixture_status(store, cache, fixture_id, payload.status)
    except LookupError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return {"ok": True, "fixture_id": fixture_id, "status": payload.status}


@app.delete("/api/admin/fixtures/{fixture_id}")
async def api_admin_delete_fixture(
    fixture_id: str,
    store: SqlDocumentStore = Depends(get_store),
    cache: TTLCache = Depends(get_cache),
):
    try:
        await delete_manual_fixture(store, cache, fixture_id)
    except LookupError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return {"ok": True}


@app.post("/api/admin/fixtures/import")
async def api_admin_import_fixtures(
    store: SqlDocumentStore = Depends(get_store),
    cache: TTLCache = Depends(get_cache),
    settings: SettingsSnapshot = Depends(get_settings_snapshot),
    fetcher=Depends(get_fixture_fetcher),
):
    try:
        result = await import_live_fixtures(
            store, cache, resolve_cricapi_key(settings), fetcher=fetcher
        )
    except CricApiError as exc:
        return JSONResponse(
            status_code=502,
            content={"error": "Failed to fetch fixtures", "details": exc.body or str(exc)},
        )
    return {
        "ok": True,
        "total_fetched": result.total_fetched,
        "inserted": result.inserted,
        "updated": result.updated,
        "skipped": result.skipped,
        "errors": result.errors,
    }


# ------------ Admin: cache, settings, logs ------------


@app.post("/api/admin/cache/clear")
async def api_admin_clear_cache(cache: TTLCache = Depends(get_cache)):
    clear_all_caches(cache)
    return {"ok": True}


@app.put("/api/admin/settings")
def api_admin_update_settings(
    payload: SettingsIn,
    db: Session = Depends(get_db),
    cache: TTLCache = Depends(get_cache),
):
    settings = get_or_create_settings(db)
    if payload.cricapi_key is not None:
        settings.cricapi_key_enc = encrypt_api_key(payload.cricapi_key.strip())
    if payload.fixtures_cache_seconds is not None:
        settings.fixtures_cache_seconds = payload.fixtures_cache_seconds
    settings.updated_at_utc = datetime.now(timezone.utc)
    db.commit()
    invalidate_fixture_caches(cache)
    return {
        "ok": True,
        "has_cricapi_key": bool(settings.cricapi_key_enc),
        "fixtures_cache_seconds": settings.fixtures_cache_seconds,
    }


@app.get("/api/logs")
def api_logs(limit: int = 100, level: str | None = None):
    handler = get_buffer_handler()
    return {"entries": handler.entries(limit=limit, min_level=level)}
