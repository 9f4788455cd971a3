from enum import Enum
from pydantic import BaseModel

class Role(str, Enum):
    admin = "ADMIN"
    supervisor = "SUPERVISOR"
    user = "USER"
    viewer = "VIEWER"

# roles allowed to name the work center / branch per row in an import file
PRIVILEGED_ROLES = (Role.admin,)

class Caller(BaseModel):
    login: str
    user_id: int
    role: Role
    work_center_id: int | None = None
    branch_id: int | None = None

    @property
    def is_privileged(self) -> bool:
        return self.role in PRIVILEGED_ROLES

class CallerOut(BaseModel):
    login: str
    user_id: int
    role: str
    work_center_id: int | None = None
    branch_id: int | None = None
