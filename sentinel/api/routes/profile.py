"""Profile endpoints."""

from fastapi import APIRouter, Depends, File, HTTPException, Request, UploadFile

from sentinel.api.deps import Runtime, get_runtime, require_pipeline
from sentinel.api.limiter import limiter
from sentinel.api.schemas import ProfileResponse, SourceTextUpdate
from sentinel.core.context import SentinelContext
from sentinel.core.models import SAMPLE_RESUME, AgentType
from sentinel.errors import ExternalServiceError
from sentinel.tools.resume_import import read_resume_upload

MAX_UPLOAD_SIZE = 5 * 1024 * 1024  # 5 MB

router = APIRouter()


def _profile_response(context: SentinelContext) -> ProfileResponse:
    return ProfileResponse(
        source_text=context.source_text,
        profile=context.profile,
        locked=context.profile is not None,
        is_locking=context.profiles.is_locking,
    )


@router.get("", response_model=ProfileResponse)
async def get_profile(runtime: Runtime = Depends(get_runtime)):
    """Get resume text and locked profile (if any)."""
    return _profile_response(runtime.context)


@router.put("/source", response_model=ProfileResponse)
async def replace_source_text(data: SourceTextUpdate, runtime: Runtime = Depends(get_runtime)):
    """Replace the resume text. A different text unlocks the profile."""
    runtime.context.replace_source_text(data.text)
    return _profile_response(runtime.context)


@router.post("/upload", response_model=ProfileResponse)
async def upload_resume(file: UploadFile = File(...), runtime: Runtime = Depends(get_runtime)):
    """Import a resume (.txt, .md or .pdf) as the new source text."""
    content = await file.read()
    if len(content) > MAX_UPLOAD_SIZE:
        raise HTTPException(status_code=413, detail="Resume exceeds 5 MB")

    text = read_resume_upload(file.filename or "", content)
    runtime.context.replace_source_text(text, origin=file.filename)
    return _profile_response(runtime.context)


@router.post("/sample", response_model=ProfileResponse)
async def load_sample(runtime: Runtime = Depends(get_runtime)):
    """Load the built-in test-drive resume."""
    context = runtime.context
    context.replace_source_text(SAMPLE_RESUME)
    context.activity.add(AgentType.REPORTER, "Loaded test profile: Project Manager.")
    return _profile_response(context)


@router.post("/lock", response_model=ProfileResponse)
@limiter.limit("5/minute")
async def lock_profile(request: Request, runtime: Runtime = Depends(get_runtime)):
    """Synthesize and lock a profile from the current resume text."""
    pipeline = require_pipeline(runtime)
    try:
        await runtime.context.lock_profile(pipeline)
    except ExternalServiceError as e:
        raise HTTPException(status_code=502, detail=f"Profiler failed: {e}")
    return _profile_response(runtime.context)
