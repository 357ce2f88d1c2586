"""HTTP route definitions for the service."""

from __future__ import annotations

from pathlib import Path

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status

from app.schemas import DatasetResponse, SeriesResponse, build_series
from datastore.dataset_store import DatasetStore, LoadedDataset, build_default_store
from services.loader import LoadError, load_weather_bytes
from settings import get_settings

router = APIRouter()


def get_store() -> DatasetStore:
    return build_default_store()


async def load_upload(file: UploadFile, store: DatasetStore) -> LoadedDataset:
    """Parse an uploaded CSV and make it the current dataset.

    Raises ``ValueError`` for an empty upload and ``LoadError`` for a file
    that does not parse; the store is only touched on success.
    """
    contents = await file.read()
    if not contents:
        raise ValueError("Uploaded file is empty.")
    filename = Path(file.filename or "upload.csv").name
    records = load_weather_bytes(
        contents,
        encoding=get_settings().upload_encoding,
        source=filename,
    )
    return store.replace(filename, records)


def _require_current(store: DatasetStore) -> LoadedDataset:
    dataset = store.current()
    if dataset is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="No weather dataset has been loaded yet.",
        )
    return dataset


@router.post(
    "/datasets",
    status_code=status.HTTP_201_CREATED,
    response_model=DatasetResponse,
    summary="Upload a weather CSV and make it the current dataset.",
)
async def upload_dataset(
    file: UploadFile = File(..., description="CSV file of weather observations."),
    store: DatasetStore = Depends(get_store),
) -> DatasetResponse:
    try:
        dataset = await load_upload(file, store)
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from exc
    except LoadError as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=exc.message,
        ) from exc
    finally:
        await file.close()
    return DatasetResponse.from_dataset(dataset)


@router.get(
    "/datasets/current",
    response_model=DatasetResponse,
    summary="Fetch the rows, series and average of the current dataset.",
)
async def get_current_dataset(
    store: DatasetStore = Depends(get_store),
) -> DatasetResponse:
    return DatasetResponse.from_dataset(_require_current(store))


@router.get(
    "/datasets/current/series",
    response_model=SeriesResponse,
    summary="Fetch the min/max temperature series of the current dataset.",
)
async def get_current_series(
    store: DatasetStore = Depends(get_store),
) -> SeriesResponse:
    return SeriesResponse(series=build_series(_require_current(store)))


@router.get(
    "/health",
    summary="Health check endpoint.",
    status_code=status.HTTP_200_OK,
)
async def healthcheck() -> dict[str, str]:
    return {"status": "ok"}


@router.get(
    "/",
    summary="Root endpoint mirrors health information.",
    status_code=status.HTTP_200_OK,
)
async def root() -> dict[str, str]:
    return {"status": "ok", "detail": "See /ui for the weather analyzer."}
