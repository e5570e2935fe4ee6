"""Plan session endpoints - generation, local edits and refinement."""

import logging
from pathlib import Path
from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends, HTTPException, Response, status

from tripcraft.api.deps import SessionRegistry, get_registry
from tripcraft.config import Settings, get_settings
from tripcraft.llm.gateway import OracleError, OracleQuotaError
from tripcraft.models.requests import (
    DayNoteRequest,
    ExportRequest,
    GeneratePlanRequest,
    PackingItemRequest,
    PackingListRequest,
    RebuildRequest,
    ReorderRequest,
    SelectDestinationRequest,
    SuggestionsRequest,
)
from tripcraft.models.views import SessionView
from tripcraft.persistence.plan_files import (
    PlanFileError,
    dump_saved_plan,
    plan_filename,
    save_plan_file,
    saved_plan_from_document,
)
from tripcraft.planning.costs import CostSummary
from tripcraft.planning.session import PlanSession

router = APIRouter(prefix="/sessions", tags=["sessions"])
logger = logging.getLogger(__name__)

Registry = Annotated[SessionRegistry, Depends(get_registry)]


def build_view(session: PlanSession) -> SessionView:
    """Build the API snapshot of a session."""
    return SessionView(
        session_id=session.session_id,
        state=session.state.value,
        modified=session.modified,
        can_rebuild=session.can_rebuild(),
        error=session.error,
        suggestions=session.suggestions,
        destination=session.destination,
        style=session.style,
        plan=session.plan,
        city_sequence=session.city_sequence(),
        cities_marked=session.tracker.cities_marked,
        deleted_activities=session.tracker.deleted,
    )


def oracle_http_error(error: OracleError) -> HTTPException:
    """Map oracle failures to HTTP errors (429 for quota, 502 otherwise)."""
    if isinstance(error, OracleQuotaError):
        return HTTPException(status_code=status.HTTP_429_TOO_MANY_REQUESTS, detail=str(error))
    return HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(error))


@router.post("", response_model=SessionView, status_code=status.HTTP_201_CREATED)
async def create_session(registry: Registry) -> SessionView:
    session = registry.create()
    logger.info(f"[POST /sessions] session_id={session.session_id}")
    return build_view(session)


@router.get("/{session_id}", response_model=SessionView)
async def get_session(session_id: str, registry: Registry) -> SessionView:
    return build_view(registry.get(session_id))


@router.delete("/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_session(session_id: str, registry: Registry) -> Response:
    registry.remove(session_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{session_id}/suggestions", response_model=SessionView)
async def request_suggestions(
    session_id: str, body: SuggestionsRequest, registry: Registry
) -> SessionView:
    """Fetch destination suggestions, or look up a named country directly."""
    session = registry.get(session_id)
    try:
        await session.request_suggestions(body.budget, body.season, body.continent, body.country)
    except OracleError as e:
        raise oracle_http_error(e) from e
    return build_view(session)


@router.post("/{session_id}/suggestions/off-beat", response_model=SessionView)
async def request_offbeat_suggestions(session_id: str, registry: Registry) -> SessionView:
    session = registry.get(session_id)
    try:
        await session.request_offbeat_suggestions()
    except OracleError as e:
        raise oracle_http_error(e) from e
    return build_view(session)


@router.post("/{session_id}/destination", response_model=SessionView)
async def select_destination(
    session_id: str, body: SelectDestinationRequest, registry: Registry
) -> SessionView:
    session = registry.get(session_id)
    session.select_destination(body.destination)
    return build_view(session)


@router.post("/{session_id}/plan", response_model=SessionView)
async def generate_plan(
    session_id: str, body: GeneratePlanRequest, registry: Registry
) -> SessionView:
    """Generate a plan for the selected destination.

    Raises:
        HTTPException: 409 if no destination is selected, 429/502 on oracle failure
    """
    session = registry.get(session_id)
    if session.destination is None:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="No destination selected")
    try:
        await session.generate_plan(body.duration, body.style, body.notes)
    except OracleError as e:
        raise oracle_http_error(e) from e
    return build_view(session)


@router.delete("/{session_id}/days/{day}/activities/{activity_id}", response_model=SessionView)
async def delete_activity(
    session_id: str, day: int, activity_id: str, registry: Registry
) -> SessionView:
    session = registry.get(session_id)
    session.delete_activity(day - 1, activity_id)
    return build_view(session)


@router.put("/{session_id}/days/{day}/order", response_model=SessionView)
async def reorder_activities(
    session_id: str, day: int, body: ReorderRequest, registry: Registry
) -> SessionView:
    session = registry.get(session_id)
    session.reorder_activities(day - 1, body.activity_ids)
    return build_view(session)


@router.put("/{session_id}/days/{day}/note", response_model=SessionView)
async def update_day_note(
    session_id: str, day: int, body: DayNoteRequest, registry: Registry
) -> SessionView:
    session = registry.get(session_id)
    session.update_day_note(day - 1, body.text)
    return build_view(session)


@router.post("/{session_id}/cities/{index}/toggle", response_model=SessionView)
async def toggle_city_removal(session_id: str, index: int, registry: Registry) -> SessionView:
    """Mark or unmark a stop of the current city sequence for removal (0-based)."""
    session = registry.get(session_id)
    session.toggle_city_removal(index)
    return build_view(session)


@router.post("/{session_id}/rebuild", response_model=SessionView)
async def rebuild_plan(session_id: str, body: RebuildRequest, registry: Registry) -> SessionView:
    """Refine the plan with pending edits and notes.

    On failure the plan and pending edits are kept so the request can be retried.
    """
    session = registry.get(session_id)
    if session.plan is None:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="No plan to rebuild")
    try:
        await session.rebuild(body.notes)
    except OracleError as e:
        raise oracle_http_error(e) from e
    return build_view(session)


@router.post("/{session_id}/discard", response_model=SessionView)
async def discard_changes(session_id: str, registry: Registry) -> SessionView:
    session = registry.get(session_id)
    session.discard()
    return build_view(session)


@router.post("/{session_id}/back", response_model=SessionView)
async def go_back(session_id: str, registry: Registry) -> SessionView:
    session = registry.get(session_id)
    session.back()
    return build_view(session)


@router.post("/{session_id}/return", response_model=SessionView)
async def return_to_plan(session_id: str, registry: Registry) -> SessionView:
    session = registry.get(session_id)
    session.return_to_plan()
    return build_view(session)


@router.post("/{session_id}/reset", response_model=SessionView)
async def reset_session(session_id: str, registry: Registry) -> SessionView:
    session = registry.get(session_id)
    session.reset()
    return build_view(session)


@router.get("/{session_id}/costs", response_model=CostSummary)
async def get_costs(session_id: str, registry: Registry) -> CostSummary:
    summary = registry.get(session_id).cost_summary()
    if summary is None:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="No plan available")
    return summary


@router.post("/{session_id}/packing", response_model=SessionView)
async def generate_packing_list(session_id: str, registry: Registry) -> SessionView:
    session = registry.get(session_id)
    try:
        await session.generate_packing_list()
    except OracleError as e:
        raise oracle_http_error(e) from e
    return build_view(session)


@router.put("/{session_id}/packing", response_model=SessionView)
async def replace_packing_list(
    session_id: str, body: PackingListRequest, registry: Registry
) -> SessionView:
    session = registry.get(session_id)
    session.update_packing_list(body.categories)
    return build_view(session)


@router.post("/{session_id}/packing/items", response_model=SessionView)
async def add_packing_item(
    session_id: str, body: PackingItemRequest, registry: Registry
) -> SessionView:
    session = registry.get(session_id)
    if session.plan is not None and not session.add_packing_item(body.category, body.item):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f'Item "{body.item}" already exists in the packing list.',
        )
    return build_view(session)


@router.delete("/{session_id}/packing/items/{item}", response_model=SessionView)
async def remove_packing_item(session_id: str, item: str, registry: Registry) -> SessionView:
    session = registry.get(session_id)
    session.remove_packing_item(item)
    return build_view(session)


@router.post("/{session_id}/packing/items/{item}/toggle", response_model=SessionView)
async def toggle_packing_item(session_id: str, item: str, registry: Registry) -> SessionView:
    session = registry.get(session_id)
    session.toggle_packing_item(item)
    return build_view(session)


@router.post("/{session_id}/load", response_model=SessionView)
async def load_plan(
    session_id: str, document: Annotated[dict[str, Any], Body()], registry: Registry
) -> SessionView:
    """Adopt a saved plan document.

    Raises:
        HTTPException: 400 if the document is malformed (session unchanged)
    """
    session = registry.get(session_id)
    try:
        saved = saved_plan_from_document(document)
    except PlanFileError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    session.load(saved)
    return build_view(session)


@router.post("/{session_id}/export")
async def export_plan(session_id: str, body: ExportRequest, registry: Registry) -> Response:
    """Download the current plan as a saved plan document."""
    session = registry.get(session_id)
    saved = session.to_saved(body.name)
    if saved is None:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="No plan available")
    return Response(
        content=dump_saved_plan(saved),
        media_type="application/json",
        headers={"Content-Disposition": f'attachment; filename="{plan_filename(saved.name)}"'},
    )


@router.post("/{session_id}/save")
async def save_plan(
    session_id: str,
    body: ExportRequest,
    registry: Registry,
    settings: Annotated[Settings, Depends(get_settings)],
) -> dict[str, str]:
    """Write the current plan into the configured plans directory."""
    session = registry.get(session_id)
    saved = session.to_saved(body.name)
    if saved is None:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="No plan available")
    path = save_plan_file(saved, Path(settings.plans_dir))
    return {"id": saved.id, "name": saved.name, "path": str(path)}
