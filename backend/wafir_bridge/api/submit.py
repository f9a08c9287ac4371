"""Submission API - creates GitHub issues from widget reports."""

import logging
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile
from fastapi.responses import JSONResponse

from wafir_bridge.api.deps import get_submit_service
from wafir_bridge.config import settings
from wafir_bridge.dtos.config import ErrorResponse
from wafir_bridge.dtos.submit import StorageType, SubmissionRequest, SubmitResponse
from wafir_bridge.services.submit_service import SubmitService, parse_labels
from wafir_bridge.utils.github_errors import map_github_error

logger = logging.getLogger(__name__)

router = APIRouter(tags=["WAFIR"])


@router.post(
    "/submit",
    response_model=SubmitResponse,
    response_model_exclude_none=True,
    responses={
        400: {"model": ErrorResponse},
        413: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
async def submit(
    installationId: Annotated[int, Form()],
    owner: Annotated[str, Form(min_length=1)],
    repo: Annotated[str, Form(min_length=1)],
    title: Annotated[str, Form(min_length=1)],
    body: Annotated[str, Form(min_length=1)],
    labels: Annotated[Optional[str], Form()] = None,
    storageType: Annotated[StorageType, Form()] = "issue",
    projectOwner: Annotated[Optional[str], Form()] = None,
    projectNumber: Annotated[Optional[int], Form()] = None,
    screenshot: Annotated[Optional[UploadFile], File()] = None,
    service: SubmitService = Depends(get_submit_service),
):
    """
    Create a new issue in the target GitHub repository, add an item to a
    GitHub project (``storageType=project``), or both.

    Accepts multipart/form-data; an optional screenshot is uploaded to the
    snapshot bucket and linked from the body. Project items are not given
    field values from the form.
    """
    if storageType != "issue" and projectNumber is None:
        return JSONResponse(
            status_code=400,
            content={
                "error": "Submission Failed",
                "message": "projectNumber is required for project storage",
            },
        )

    screenshot_bytes = None
    screenshot_type = "image/png"
    if screenshot is not None:
        limit = settings.SUBMIT_MAX_SCREENSHOT_BYTES
        screenshot_bytes = await screenshot.read(limit + 1)
        if len(screenshot_bytes) > limit:
            return JSONResponse(
                status_code=413,
                content={
                    "error": "Payload Too Large",
                    "message": f"Screenshot exceeds the {limit} byte limit",
                },
            )
        screenshot_type = screenshot.content_type or screenshot_type

    submission = SubmissionRequest(
        installationId=installationId,
        owner=owner,
        repo=repo,
        title=title,
        body=body,
        labels=parse_labels(labels),
        storageType=storageType,
        projectOwner=projectOwner,
        projectNumber=projectNumber,
    )

    try:
        return await service.submit(submission, screenshot_bytes, screenshot_type)
    except Exception as e:
        logger.exception(f"Submission to {owner}/{repo} failed")
        mapped = map_github_error(e, operation="issue")
        return JSONResponse(
            status_code=mapped.status_code,
            content={"error": "Submission Failed", "message": mapped.message},
        )
