from fastapi import APIRouter, Depends, HTTPException, Response, status
from gymapp.deps.auth import get_active_workout, get_current_user
from gymapp.fitness.active_workout import ActiveWorkout
from gymapp.fitness.exercises import resolve_exercise
from gymapp.local_store import templates_for
from gymapp.models import User
from gymapp.routers.active_workout import state_view
from gymapp.schemas.history import TemplateCreate, TemplateUpdate, WorkoutTemplate
from gymapp.schemas.workout import WorkoutStarted

router = APIRouter(prefix="/templates", tags=["templates"])

def _missing():
    return HTTPException(status_code=404, detail="Template not found")

@router.get("", response_model=list[WorkoutTemplate])
def list_templates(current: User = Depends(get_current_user)):
    return templates_for(current.id).all()

@router.post("", response_model=WorkoutTemplate, status_code=status.HTTP_201_CREATED)
def create_template(payload: TemplateCreate, current: User = Depends(get_current_user)):
    return templates_for(current.id).add(payload.name, payload.exercises)

@router.patch("/{template_id}", response_model=WorkoutTemplate)
def update_template(template_id: str, payload: TemplateUpdate, current: User = Depends(get_current_user)):
    updates = {k: getattr(payload, k) for k in payload.model_fields_set if getattr(payload, k) is not None}
    template = templates_for(current.id).update(template_id, **updates)
    if template is None:
        raise _missing()
    return template

@router.delete("/{template_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_template(template_id: str, current: User = Depends(get_current_user)):
    if not templates_for(current.id).delete(template_id):
        raise _missing()
    return Response(status_code=status.HTTP_204_NO_CONTENT)

@router.post("/{template_id}/use", response_model=WorkoutStarted, status_code=status.HTTP_201_CREATED)
def use_template(
    template_id: str,
    current: User = Depends(get_current_user),
    active: ActiveWorkout = Depends(get_active_workout),
):
    """Start a workout pre-filled with the template's exercises and planned sets."""
    template = templates_for(current.id).mark_used(template_id)
    if template is None:
        raise _missing()
    replaced = active.is_active
    active.start(template.name, template_id=template.id)
    for item in template.exercises:
        entry = active.add_exercise(resolve_exercise(item.name))
        index = entry.order_index
        for n in range(item.sets):
            active.add_set(index)
            if n == 0:
                # later sets carry these forward
                active.update_set(index, 0, reps=item.default_reps, weight_kg=item.default_weight)
    return {**state_view(active), "replaced": replaced}
