from fastapi import APIRouter, Depends, Response, status
from typing import List

from .. import models, schemas
from ..exceptions import ResumeNotFoundError
from ..services.storage.resume_repository import ResumeRepository
from .deps import get_current_user, get_repository, parse_resume_id

router = APIRouter()

@router.get("/resumes", response_model=List[schemas.resume.Resume])
async def list_resumes_endpoint(
    repo: ResumeRepository = Depends(get_repository),
    current_user: models.user.User = Depends(get_current_user),
):
    """
    Get all resumes for the current (fixed) user.
    """
    return repo.list_for_user(current_user.id)


@router.get("/resumes/{resume_id}", response_model=schemas.resume.Resume)
async def get_resume_endpoint(
    resume_id: int = Depends(parse_resume_id),
    repo: ResumeRepository = Depends(get_repository),
):
    resume = repo.get(resume_id)
    if resume is None:
        raise ResumeNotFoundError(resume_id)
    return resume


@router.post("/resumes", response_model=schemas.resume.Resume, status_code=status.HTTP_201_CREATED)
async def create_resume_endpoint(
    request: schemas.resume.ResumeWrite,
    repo: ResumeRepository = Depends(get_repository),
    current_user: models.user.User = Depends(get_current_user),
):
    """
    Create a resume. Omitted fields take their defaults; the server assigns the id.
    """
    return repo.create(request.to_columns(), user_id=current_user.id)


@router.put("/resumes/{resume_id}", response_model=schemas.resume.Resume)
async def update_resume_endpoint(
    request: schemas.resume.ResumeWrite,
    resume_id: int = Depends(parse_resume_id),
    repo: ResumeRepository = Depends(get_repository),
):
    """
    Partially update a resume. Fields missing from the body are left untouched.
    """
    resume = repo.update(resume_id, request.to_columns())
    if resume is None:
        raise ResumeNotFoundError(resume_id)
    return resume


@router.delete("/resumes/{resume_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_resume_endpoint(
    resume_id: int = Depends(parse_resume_id),
    repo: ResumeRepository = Depends(get_repository),
):
    if not repo.delete(resume_id):
        raise ResumeNotFoundError(resume_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
