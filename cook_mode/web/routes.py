"""REST API routes for Cook Mode."""
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, ValidationError

from .runner import CookModeRunner, cook_mode_runner

router = APIRouter(prefix="/api")


def get_runner() -> CookModeRunner:
    return cook_mode_runner


class ToggleRequest(BaseModel):
    """Request body for flipping the Cook Mode toggle."""
    checked: bool


class VisibilityRequest(BaseModel):
    visible: bool = True


class SettingsForm(BaseModel):
    """Submitted settings form. Missing fields fall back to defaults."""
    enabled: Optional[bool] = None
    position: Optional[str] = None
    label: Optional[str] = None
    description: Optional[str] = None
    toggle_color: Optional[str] = None
    active_text: Optional[str] = None
    inactive_text: Optional[str] = None
    error_text: Optional[str] = None


# ==================== STATUS ENDPOINTS ====================

@router.get("/status")
async def get_status(runner: CookModeRunner = Depends(get_runner)):
    """Get toggle, status and session state."""
    return runner.get_status()


@router.post("/cook-mode")
async def toggle_cook_mode(request: ToggleRequest, runner: CookModeRunner = Depends(get_runner)):
    """Turn Cook Mode on or off."""
    if request.checked and not runner.settings.get().enabled:
        raise HTTPException(status_code=409, detail="Cook Mode is disabled in settings")
    if request.checked and runner.control.disabled:
        raise HTTPException(status_code=409, detail="Cook Mode not supported on this device")

    await runner.set_checked(request.checked)
    return runner.get_status()


@router.post("/visibility")
async def visibility_changed(request: VisibilityRequest, runner: CookModeRunner = Depends(get_runner)):
    """Report a page visibility change."""
    if request.visible:
        await runner.visibility_restored()
    return runner.get_status()


@router.post("/unload")
async def page_unload(runner: CookModeRunner = Depends(get_runner)):
    """The page is going away; release any held wake lock."""
    runner.unload()
    return {"status": "released"}


# ==================== SETTINGS ENDPOINTS ====================

@router.get("/settings")
async def get_settings(runner: CookModeRunner = Depends(get_runner)):
    """Get current Cook Mode settings."""
    return runner.settings.get().model_dump()


@router.put("/settings")
async def update_settings(form: SettingsForm, runner: CookModeRunner = Depends(get_runner)):
    """Replace the settings with a sanitized copy of the submitted form."""
    try:
        settings = runner.update_settings(form.model_dump(exclude_none=True))
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=e.errors(include_url=False, include_context=False))
    return settings.model_dump()


@router.post("/settings/reset")
async def reset_settings(runner: CookModeRunner = Depends(get_runner)):
    """Restore default settings."""
    return runner.reset_settings().model_dump()
