"""FastAPI endpoints for user accounts."""

from fastapi import APIRouter, Depends
from protean.utils.globals import current_domain

from storefront.account.credentials import check_credentials
from storefront.account.profile import update_user
from storefront.account.registration import register_user
from storefront.account.removal import RemoveUser
from storefront.account.user import User
from storefront.api.guards import require_admin
from storefront.api.responses import envelope
from storefront.api.schemas import ApiResponse, LoginRequest, RegisterUserRequest, UpdateUserRequest, UserOut

router = APIRouter(prefix="/users", tags=["users"])


def user_out(user: User) -> UserOut:
    return UserOut(
        user_id=str(user.id),
        name=user.name,
        email=user.email,
        role=user.role,
        address=user.address,
    )


def _repo():
    return current_domain.repository_for(User)


@router.post("", status_code=201, response_model=ApiResponse)
async def register(body: RegisterUserRequest) -> ApiResponse:
    user_id = register_user(name=body.name, email=body.email, password=body.password, address=body.address)
    return envelope(user_out(_repo().get_user(user_id)), message="User registered")


@router.post("/login", response_model=ApiResponse)
async def login(body: LoginRequest) -> ApiResponse:
    user = check_credentials(body.email, body.password)
    return envelope(user_out(user), message="Credentials accepted")


@router.get("", response_model=ApiResponse, dependencies=[Depends(require_admin)])
async def list_users() -> ApiResponse:
    users = _repo().listing()
    return envelope([user_out(user) for user in users], message=f"{len(users)} users")


@router.get("/{user_id}", response_model=ApiResponse)
async def get_user(user_id: str) -> ApiResponse:
    return envelope(user_out(_repo().get_user(user_id)))


@router.put("/{user_id}", response_model=ApiResponse)
async def update(user_id: str, body: UpdateUserRequest) -> ApiResponse:
    update_user(user_id, name=body.name, email=body.email, address=body.address)
    return envelope(user_out(_repo().get_user(user_id)), message="User updated")


@router.delete("/{user_id}", response_model=ApiResponse, dependencies=[Depends(require_admin)])
async def remove(user_id: str) -> ApiResponse:
    current_domain.process(RemoveUser(user_id=user_id), asynchronous=False)
    return envelope({"user_id": user_id}, message="User removed")
