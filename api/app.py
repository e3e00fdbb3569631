"""FastAPI application for the translation pipeline."""
import logging
import os
import uuid
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional
import sys
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from fastapi import Depends, FastAPI, File, Form, Request, UploadFile
from fastapi.responses import PlainTextResponse, Response
from fastapi.middleware.cors import CORSMiddleware

from config import Config
from errors import UnsupportedFormatError
from models import JobStatus
from pipeline import TranslationPipeline, default_job_id


logger = logging.getLogger(__name__)

_pipeline: Optional[TranslationPipeline] = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    if _pipeline is not None:
        await _pipeline.close()


app = FastAPI(title="Document Translation API", version="1.0.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def get_pipeline() -> TranslationPipeline:
    """Process-wide pipeline, created on first use."""
    global _pipeline
    if _pipeline is None:
        _pipeline = TranslationPipeline(Config.from_env())
    return _pipeline


@app.middleware("http")
async def log_requests(request: Request, call_next):
    logger.info("%s %s", request.method, request.url.path)
    return await call_next(request)


def _error_response(status_code: int, message: str) -> PlainTextResponse:
    return PlainTextResponse(f"An error occurred during translation: {message}", status_code=status_code)


@app.post("/api/translate")
async def translate_document(
    file: Optional[UploadFile] = File(None),
    targetLanguage: Optional[str] = Form(None),
    jobId: Optional[str] = Form(None),
    pipeline: TranslationPipeline = Depends(get_pipeline),
):
    """
    Translate an uploaded PDF or PPTX document.

    Responds with the translated document bytes. Progress can be polled with
    GET /api/status/{jobId} while the request is running.
    """
    job_id = jobId or default_job_id()

    if file is None or not file.filename:
        pipeline.jobs.set(job_id, JobStatus.ERROR, "No file uploaded.")
        return PlainTextResponse("No file uploaded.", status_code=400)

    # Keep the upload on disk for the lifetime of the request
    upload_dir = pipeline.config.upload_dir
    os.makedirs(upload_dir, exist_ok=True)
    input_path = os.path.join(upload_dir, f"{uuid.uuid4().hex}{Path(file.filename).suffix}")
    with open(input_path, "wb") as f:
        f.write(await file.read())

    try:
        with open(input_path, "rb") as f:
            data = f.read()
        result = await pipeline.translate_bytes(data, file.filename, targetLanguage, job_id)
    except UnsupportedFormatError as e:
        return _error_response(400, str(e))
    except Exception as e:
        # Already logged and recorded on the job by the pipeline
        return _error_response(500, str(e))
    finally:
        if os.path.exists(input_path):
            os.remove(input_path)

    return Response(
        content=result.content,
        media_type=result.media_type,
        headers={"Content-Disposition": f'attachment; filename="{result.filename}"'},
    )


@app.get("/api/status/{job_id}")
async def get_status(job_id: str, pipeline: TranslationPipeline = Depends(get_pipeline)):
    """Get the status of a translation job; unknown ids report status "unknown"."""
    return pipeline.jobs.get(job_id).to_dict()


@app.get("/health")
async def health_check(pipeline: TranslationPipeline = Depends(get_pipeline)):
    """Health check endpoint."""
    return {
        "status": "ok",
        "oracle_url": pipeline.config.oracle_url,
        "model": pipeline.config.oracle_model,
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
