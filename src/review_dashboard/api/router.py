from __future__ import annotations

from typing import Union

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import RedirectResponse

from .. import routing
from ..auth.header import HeaderAuthProvider
from ..config import Settings
from ..db.base import BaseDocumentStore
from ..services.dashboard import DashboardScreen, DashboardView
from ..services.sidebar import SidebarScreen, SidebarView


router = APIRouter(tags=["business"])


def get_store(request: Request) -> BaseDocumentStore:
    return request.app.state.store


def get_clock(request: Request):
    return getattr(request.app.state, "clock", None)


def get_auth(request: Request) -> HeaderAuthProvider:
    settings: Settings = request.app.state.settings
    return HeaderAuthProvider.from_headers(request.headers, settings.USER_HEADER)


def _redirect(navigator: routing.RecordingNavigator, status_code: int = status.HTTP_307_TEMPORARY_REDIRECT):
    if navigator.last is None:
        return None
    return RedirectResponse(navigator.last, status_code=status_code)


@router.get(routing.DASHBOARD_PATH, response_model=None)
async def dashboard(
    auth: HeaderAuthProvider = Depends(get_auth),
    store: BaseDocumentStore = Depends(get_store),
    clock=Depends(get_clock),
) -> Union[DashboardView, RedirectResponse]:
    navigator = routing.RecordingNavigator()
    async with DashboardScreen(auth, store, navigator, clock=clock) as screen:
        redirect = _redirect(navigator)
        if redirect is not None:
            return redirect
        return screen.render()


@router.get("/sidebar", response_model=SidebarView)
async def sidebar(
    path: str = routing.DASHBOARD_PATH,
    auth: HeaderAuthProvider = Depends(get_auth),
    store: BaseDocumentStore = Depends(get_store),
    clock=Depends(get_clock),
) -> SidebarView:
    navigator = routing.RecordingNavigator()
    async with SidebarScreen(auth, store, navigator, current_path=path, clock=clock) as screen:
        return screen.render()


@router.post("/logout")
async def logout(
    auth: HeaderAuthProvider = Depends(get_auth),
    store: BaseDocumentStore = Depends(get_store),
) -> RedirectResponse:
    navigator = routing.RecordingNavigator()
    screen = SidebarScreen(auth, store, navigator)
    await screen.logout()
    return _redirect(navigator, status_code=status.HTTP_303_SEE_OTHER)


@router.get("/health")
async def health() -> dict:
    return {"status": "ok"}
