"""FastAPI router for the answers API."""
import logging
import mimetypes
from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, BackgroundTasks, Depends, File, Form, Request, UploadFile
from fastapi.responses import FileResponse

from .database import ConnectionManager
from .errors import NotFoundError
from .repository import AnswerRepository
from .schemas import AnswerRecord, ErrorResponse, HealthResponse, MessageResponse
from .storage import UploadStorage


logger = logging.getLogger(__name__)


def get_connection_manager(request: Request) -> ConnectionManager:
    return request.app.state.connection_manager


def get_repository(request: Request) -> AnswerRepository:
    return request.app.state.repository


def get_storage(request: Request) -> UploadStorage:
    return request.app.state.storage


async def get_database(manager: ConnectionManager = Depends(get_connection_manager)):
    """Connection gate: every /api route waits for a live store handle."""
    return await manager.ensure_connected()


health_router = APIRouter()

router = APIRouter(
    prefix="/api",
    dependencies=[Depends(get_database)],
    responses={500: {"model": ErrorResponse}},
)


@health_router.get("/health", response_model=HealthResponse, tags=["Health"])
async def health_check():
    """Health check endpoint (does not touch the store)."""
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now().isoformat()
    )


@router.get("/answers", response_model=List[AnswerRecord], tags=["Answers"])
async def list_answers(
    db=Depends(get_database),
    repository: AnswerRepository = Depends(get_repository),
):
    """List every answer, newest uploadDate first."""
    return await repository.list_answers(db)


@router.post("/upload", response_model=AnswerRecord, status_code=201, tags=["Answers"])
async def upload_answer(
    file: Optional[UploadFile] = File(None),
    title: Optional[str] = Form(None),
    question: Optional[str] = Form(None),
    uploadDate: Optional[str] = Form(None),
    gsPaper: Optional[str] = Form(None),
    source: Optional[str] = Form(None),
    db=Depends(get_database),
    repository: AnswerRepository = Depends(get_repository),
    storage: UploadStorage = Depends(get_storage),
):
    """Store an optional file and create an answer referencing it.

    The file goes to ephemeral storage; the record keeps its generated name,
    path and content type.
    """
    fields = {
        "title": title,
        "question": question,
        "uploadDate": uploadDate,
        "gsPaper": gsPaper,
        "source": source,
    }

    if file is not None and file.filename:
        stored = await storage.save(file.filename, file.file, file.content_type)
        fields.update(
            fileName=stored.file_name,
            filePath=stored.file_path,
            mimeType=stored.mime_type,
        )

    record = await repository.create_answer(db, fields)
    logger.info("Created answer %s (file=%s)", record.id, record.fileName)
    return record


@router.delete(
    "/answers/{answer_id}",
    response_model=MessageResponse,
    responses={404: {"model": MessageResponse}},
    tags=["Answers"],
)
async def delete_answer(
    answer_id: str,
    background_tasks: BackgroundTasks,
    db=Depends(get_database),
    repository: AnswerRepository = Depends(get_repository),
    storage: UploadStorage = Depends(get_storage),
):
    """Delete an answer and, best effort, its temporary file.

    File cleanup runs after the response and never fails the request. Record
    and file removal are not transactional.
    """
    answer = await repository.get_answer(db, answer_id)
    if answer is None:
        raise NotFoundError("Answer not found")

    if answer.filePath:
        background_tasks.add_task(storage.remove_quietly, answer.filePath)

    await repository.delete_answer(db, answer_id)
    logger.info("Deleted answer %s", answer_id)
    return MessageResponse(message="Answer deleted successfully")


@router.get(
    "/uploads/{file_name}",
    response_class=FileResponse,
    responses={404: {"model": MessageResponse}},
    tags=["Uploads"],
)
async def serve_upload(
    file_name: str,
    storage: UploadStorage = Depends(get_storage),
):
    """Stream a previously uploaded file back with an inferred content type."""
    path = storage.resolve(file_name)
    media_type = mimetypes.guess_type(path.name)[0] or "application/octet-stream"
    return FileResponse(path, media_type=media_type)
