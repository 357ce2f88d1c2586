from __future__ import annotations

from pathlib import Path
from typing import Optional

from fastapi import APIRouter, Depends, File, Request, UploadFile, status
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

from app.api import get_store, load_upload
from app.schemas import DatasetResponse
from datastore.dataset_store import DatasetStore
from models.records import DISPLAY_COLUMNS
from services.aggregator import format_average
from services.loader import LoadError
from settings import get_settings


templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent / "templates"))


router = APIRouter(include_in_schema=False)


def _render_index(
    request: Request,
    store: DatasetStore,
    error: Optional[str] = None,
    status_code: int = status.HTTP_200_OK,
) -> HTMLResponse:
    dataset = store.current()
    payload = DatasetResponse.from_dataset(dataset) if dataset is not None else None
    return templates.TemplateResponse(
        request,
        "ui/index.html",
        {
            "title": get_settings().app_title,
            "columns": DISPLAY_COLUMNS,
            "dataset": payload,
            "average_label": payload.average_label if payload else format_average(None),
            "chart_data": _chart_data(payload),
            "error": error,
        },
        status_code=status_code,
    )


def _chart_data(payload: Optional[DatasetResponse]) -> dict:
    if payload is None:
        return {"labels": [], "datasets": []}
    labels = [point.label for point in payload.series[0].points] if payload.series else []
    return {
        "labels": labels,
        "datasets": [
            {
                "label": f"{series.name} (°C)",
                "data": [point.value for point in series.points],
            }
            for series in payload.series
        ],
    }


@router.get("/ui", name="ui_index", response_class=HTMLResponse)
async def ui_index(
    request: Request,
    store: DatasetStore = Depends(get_store),
) -> HTMLResponse:
    return _render_index(request, store)


@router.post("/ui/load", name="ui_load", response_class=HTMLResponse)
async def ui_load(
    request: Request,
    file: UploadFile = File(...),
    store: DatasetStore = Depends(get_store),
):
    try:
        await load_upload(file, store)
    except LoadError as exc:
        return _render_index(request, store, error=exc.message, status_code=status.HTTP_400_BAD_REQUEST)
    except ValueError as exc:
        return _render_index(request, store, error=str(exc), status_code=status.HTTP_400_BAD_REQUEST)
    finally:
        await file.close()
    return RedirectResponse(
        request.url_for("ui_index"),
        status_code=status.HTTP_303_SEE_OTHER,
    )
