# routers/health.py

from fastapi import APIRouter, Depends

from core.supabase_client import ping_supabase
from core.tab_generator import TabGenerator, get_tab_generator
from core.widget_filter import WidgetFilter, get_widget_filter

router = APIRouter(
    prefix="/health",
    tags=["Health"],
)


# -----------------------------------------------------
# GET /health/db
# Checks Supabase connection + permission tables
# No auth required
# -----------------------------------------------------
@router.get("/db", summary="Supabase / DB health check")
async def health_db():
    """
    Verifies Supabase connectivity against the permission tables.
    Safe for external health monitors (no auth required).
    """
    try:
        status = ping_supabase()
        return {
            "service": "Supabase",
            "status": status.get("status", "unknown"),
            "details": status,
        }

    except Exception as e:
        return {
            "service": "Supabase",
            "status": "error",
            "error": str(e),
        }


# -----------------------------------------------------
# GET /health/app
# Lightweight check; also proves the registries loaded
# -----------------------------------------------------
@router.get("/app", summary="App health check")
async def health_app(
    tabs: TabGenerator = Depends(get_tab_generator),
    widgets: WidgetFilter = Depends(get_widget_filter),
):
    return {
        "service": "Athletics Access API",
        "status": "ok",
        "tabs": len(tabs.tabs),
        "widgets": len(widgets.widgets),
    }
