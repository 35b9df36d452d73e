"""
PDF Project Endpoints.

Create and configure photo projects, edit their image list, annotate their
pages and export them as PDF. Image edits keep the original of each photo so
it can be reverted.
"""

from typing import List, Optional
from urllib.parse import quote

from fastapi import APIRouter, File, HTTPException, Query, Response, UploadFile, status

from snapsolve.core.database.entities.pdf_projects import PDFProject
from snapsolve.core.database.repositories.pdf_projects import PDFProjectRepository
from snapsolve.core.logging_config import get_logger
from snapsolve.imaging.codec import ImageDecodeError, open_image
from snapsolve.pdf.exporter import export_project_pdf
from snapsolve.server.schemas import (
    AnnotationCreate,
    AnnotationRead,
    AnnotationUpdate,
    ImageMove,
    ProjectCreate,
    ProjectImages,
    ProjectRead,
    ProjectUpdate,
)
from snapsolve.server.services.deps import ReposDep

logger = get_logger(__name__)

router = APIRouter()


def _read(project: PDFProject) -> ProjectRead:
    return ProjectRead(
        id=project.id,
        title=project.title,
        created_date=project.created_date,
        modified_date=project.modified_date,
        is_landscape=project.is_landscape,
        photos_per_page=project.photos_per_page,
        show_title=project.show_title,
        image_count=project.image_count,
        has_modified_images=project.has_modified_images,
        modified_images=[i for i in range(project.image_count) if project.is_image_modified(i)],
        page_count=project.page_count,
        annotation_count=len(project.annotations or []),
    )


async def _get_or_404(repo: PDFProjectRepository, project_id: str) -> PDFProject:
    project = await repo.get_by_id(project_id)
    if project is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Project {project_id} not found")
    return project


async def _decode_uploads(files: List[UploadFile]):
    images = []
    for upload in files:
        try:
            images.append(open_image(await upload.read()))
        except ImageDecodeError as e:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST, detail=f"{upload.filename}: {e}"
            ) from e
    return images


def _content_disposition(title: str) -> str:
    """Attachment header with an ASCII fallback name and the full UTF-8 name."""
    name = "".join(c for c in title if c.isalnum() or c in " -_").strip() or "project"
    fallback = "".join(c for c in name if c.isascii()).strip() or "project"
    encoded = quote(f"{name}.pdf")
    return f"attachment; filename=\"{fallback}.pdf\"; filename*=UTF-8''{encoded}"


def _check_index(project: PDFProject, index: int) -> None:
    if not 0 <= index < project.image_count:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"No image at index {index}")


@router.post(
    "",
    response_model=ProjectRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create Project",
    description="Create an empty project with the given layout settings.",
)
async def create_project(request: ProjectCreate, repos: ReposDep) -> ProjectRead:
    project = PDFProject.from_images(
        request.title,
        is_landscape=request.is_landscape,
        photos_per_page=request.photos_per_page,
        show_title=request.show_title,
    )
    project = await repos.projects.create(project)
    logger.info(f"Created project {project.id}")
    return _read(project)


@router.get("", response_model=List[ProjectRead], summary="List Projects")
async def list_projects(
    repos: ReposDep,
    limit: int = Query(50, ge=1, le=500),
    offset: int = Query(0, ge=0),
) -> List[ProjectRead]:
    """Most recently modified projects first."""
    return [_read(p) for p in await repos.projects.list(limit=limit, offset=offset)]


@router.get("/{project_id}", response_model=ProjectRead, summary="Get Project")
async def get_project(project_id: str, repos: ReposDep) -> ProjectRead:
    return _read(await _get_or_404(repos.projects, project_id))


@router.patch("/{project_id}", response_model=ProjectRead, summary="Update Project Configuration")
async def update_project(project_id: str, request: ProjectUpdate, repos: ReposDep) -> ProjectRead:
    project = await _get_or_404(repos.projects, project_id)
    project.update_configuration(**request.model_dump(exclude_none=True))
    return _read(await repos.projects.save(project))


@router.delete("/{project_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete Project")
async def delete_project(project_id: str, repos: ReposDep) -> None:
    if not await repos.projects.delete(project_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Project {project_id} not found")


@router.get("/{project_id}/images", response_model=ProjectImages, summary="Get Project Images")
async def get_images(project_id: str, repos: ReposDep) -> ProjectImages:
    project = await _get_or_404(repos.projects, project_id)
    return ProjectImages(images=project.image_data, original_images=project.original_image_data)


@router.post("/{project_id}/images", response_model=ProjectRead, summary="Add Images")
async def add_images(project_id: str, repos: ReposDep, files: List[UploadFile] = File(...)) -> ProjectRead:
    project = await _get_or_404(repos.projects, project_id)
    for image in await _decode_uploads(files):
        project.add_image(image)
    return _read(await repos.projects.save(project))


@router.put("/{project_id}/images", response_model=ProjectRead, summary="Replace All Images")
async def replace_images(project_id: str, repos: ReposDep, files: List[UploadFile] = File(...)) -> ProjectRead:
    project = await _get_or_404(repos.projects, project_id)
    project.update_images(await _decode_uploads(files))
    return _read(await repos.projects.save(project))


@router.put("/{project_id}/images/{index}", response_model=ProjectRead, summary="Replace One Image")
async def replace_image(project_id: str, index: int, repos: ReposDep, file: UploadFile = File(...)) -> ProjectRead:
    project = await _get_or_404(repos.projects, project_id)
    _check_index(project, index)
    (image,) = await _decode_uploads([file])
    project.update_image(index, image)
    return _read(await repos.projects.save(project))


@router.delete("/{project_id}/images/{index}", response_model=ProjectRead, summary="Remove Image")
async def remove_image(project_id: str, index: int, repos: ReposDep) -> ProjectRead:
    project = await _get_or_404(repos.projects, project_id)
    _check_index(project, index)
    project.remove_image(index)
    return _read(await repos.projects.save(project))


@router.post("/{project_id}/images/move", response_model=ProjectRead, summary="Move Image")
async def move_image(project_id: str, request: ImageMove, repos: ReposDep) -> ProjectRead:
    project = await _get_or_404(repos.projects, project_id)
    _check_index(project, request.source)
    _check_index(project, request.destination)
    project.move_image(request.source, request.destination)
    return _read(await repos.projects.save(project))


@router.post("/{project_id}/images/{index}/revert", response_model=ProjectRead, summary="Revert Image")
async def revert_image(project_id: str, index: int, repos: ReposDep) -> ProjectRead:
    project = await _get_or_404(repos.projects, project_id)
    _check_index(project, index)
    project.revert_image(index)
    return _read(await repos.projects.save(project))


@router.post("/{project_id}/images/revert", response_model=ProjectRead, summary="Revert All Images")
async def revert_all_images(project_id: str, repos: ReposDep) -> ProjectRead:
    project = await _get_or_404(repos.projects, project_id)
    project.revert_all_images()
    return _read(await repos.projects.save(project))


@router.get(
    "/{project_id}/pdf",
    summary="Export Project as PDF",
    response_class=Response,
    responses={200: {"content": {"application/pdf": {}}}},
)
async def export_pdf(project_id: str, repos: ReposDep) -> Response:
    project = await _get_or_404(repos.projects, project_id)
    pdf = export_project_pdf(project)
    return Response(
        content=pdf,
        media_type="application/pdf",
        headers={"Content-Disposition": _content_disposition(project.title)},
    )


@router.get("/{project_id}/annotations", response_model=List[AnnotationRead], summary="List Annotations")
async def list_annotations(
    project_id: str, repos: ReposDep, page: Optional[int] = Query(None, ge=0)
) -> List[AnnotationRead]:
    project = await _get_or_404(repos.projects, project_id)
    annotations = project.text_annotations if page is None else project.annotations_on_page(page)
    return [AnnotationRead.model_validate(a) for a in annotations]


@router.post(
    "/{project_id}/annotations",
    response_model=AnnotationRead,
    status_code=status.HTTP_201_CREATED,
    summary="Add Annotation",
    description="Pin a line of text to a page of the exported PDF.",
)
async def add_annotation(project_id: str, request: AnnotationCreate, repos: ReposDep) -> AnnotationRead:
    project = await _get_or_404(repos.projects, project_id)
    if request.page >= project.page_count:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"No page at index {request.page}")
    annotation = project.add_annotation(request.page, request.x, request.y, request.text)
    await repos.projects.save(project)
    logger.info(f"Added annotation {annotation.id} to project {project_id}")
    return AnnotationRead.model_validate(annotation)


@router.patch(
    "/{project_id}/annotations/{annotation_id}", response_model=AnnotationRead, summary="Edit or Move Annotation"
)
async def update_annotation(
    project_id: str, annotation_id: str, request: AnnotationUpdate, repos: ReposDep
) -> AnnotationRead:
    project = await _get_or_404(repos.projects, project_id)
    annotation = project.update_annotation(annotation_id, **request.model_dump(exclude_none=True))
    if annotation is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Annotation {annotation_id} not found")
    await repos.projects.save(project)
    return AnnotationRead.model_validate(annotation)


@router.delete(
    "/{project_id}/annotations/{annotation_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete Annotation"
)
async def delete_annotation(project_id: str, annotation_id: str, repos: ReposDep) -> None:
    project = await _get_or_404(repos.projects, project_id)
    if not project.delete_annotation(annotation_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Annotation {annotation_id} not found")
    await repos.projects.save(project)
