from fastapi import APIRouter, Depends

from outage_planner.core.deps import get_current_caller
from outage_planner.schemas.auth import Caller, CallerOut

router = APIRouter()

@router.get("/me", response_model=CallerOut)
def me(caller: Caller = Depends(get_current_caller)):
    return CallerOut(
        login=caller.login,
        user_id=caller.user_id,
        role=caller.role.value,
        work_center_id=caller.work_center_id,
        branch_id=caller.branch_id,
    )
