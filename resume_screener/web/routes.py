"""Screening routes — upload, results, CSV download, JSON API."""

import logging

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile
from fastapi.responses import JSONResponse, PlainTextResponse, RedirectResponse, Response
from starlette.concurrency import run_in_threadpool

from resume_screener.errors import ExternalServiceFailure, InputError, PersistenceError
from resume_screener.extraction.models import ResumeFile
from resume_screener.screening.service import ScreeningService

from .dependencies import flash, get_service

logger = logging.getLogger("resume_screener.web")

router = APIRouter()


@router.get("/")
def index(request: Request, service: ScreeningService = Depends(get_service)):
    return request.app.state.templates.TemplateResponse("index.html", {
        "request": request,
        "stats": service.get_candidate_stats(),
        "threshold": service.threshold,
    })


@router.post("/upload")
async def upload_resumes(
    request: Request,
    job_description: str = Form(""),
    resume_files: list[UploadFile] | None = File(None),
    service: ScreeningService = Depends(get_service),
):
    resume_files = resume_files or []
    logger.info("Received upload request with %d resume files", len(resume_files))

    files = [
        ResumeFile(filename=upload.filename or "", content=await upload.read())
        for upload in resume_files
    ]
    # Browsers submit one nameless empty part when no file is picked
    files = [f for f in files if f.filename or not f.is_empty]

    try:
        # The batch does blocking I/O; keep it off the event loop
        result = await run_in_threadpool(service.process_resumes, job_description, files)
    except InputError as e:
        flash(request, str(e), "error")
        return RedirectResponse("/", status_code=303)
    except (ExternalServiceFailure, PersistenceError) as e:
        logger.error("Error processing resumes: %s", e)
        flash(request, f"An error occurred while processing resumes: {e}", "error")
        return RedirectResponse("/", status_code=303)

    if result.is_empty:
        flash(
            request,
            "No candidates could be processed. Please check if the PDF files are valid and contain readable text.",
            "warning",
        )
        return RedirectResponse("/", status_code=303)

    message = f"Successfully processed {len(result.candidates)} resumes"
    if result.skipped:
        message += f" ({len(result.skipped)} skipped)"
    flash(request, message, "success")
    return RedirectResponse("/results", status_code=303)


@router.get("/results")
def show_results(request: Request, service: ScreeningService = Depends(get_service)):
    candidates = service.get_all_candidates_ranked()
    return request.app.state.templates.TemplateResponse("results.html", {
        "request": request,
        "candidates": candidates,
        "stats": service.get_candidate_stats(),
        "threshold": service.threshold,
    })


@router.get("/download-csv")
def download_csv(service: ScreeningService = Depends(get_service)):
    if not service.get_all_candidates_ranked():
        return PlainTextResponse("No candidates to export", status_code=400)

    filename, content = service.export_csv()
    logger.info("CSV download requested. Generated file: %s", filename)
    return Response(
        content=content.encode("utf-8"),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.post("/clear")
def clear_data(request: Request, service: ScreeningService = Depends(get_service)):
    try:
        service.clear_all_candidates()
        flash(request, "All candidate data cleared successfully", "success")
    except PersistenceError as e:
        logger.error("Error clearing data: %s", e)
        flash(request, f"Error clearing data: {e}", "error")
    return RedirectResponse("/", status_code=303)


@router.get("/api/candidates/{candidate_id}")
def candidate_details(candidate_id: int, service: ScreeningService = Depends(get_service)):
    candidate = service.get_candidate(candidate_id)
    if candidate is None:
        return JSONResponse({"error": "Candidate not found"}, status_code=404)
    return candidate.to_dict()


@router.get("/api/stats")
def stats(service: ScreeningService = Depends(get_service)):
    return service.get_candidate_stats().to_dict()


@router.get("/api/health")
def health_check():
    return PlainTextResponse("Resume Screener is running")
