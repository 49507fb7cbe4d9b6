from fastapi import APIRouter

router = APIRouter(prefix="/health", tags=["health"])

@router.get("")
def health():
    # Check si l'API est up
    return {"status": "OK"}
