"""Rutas de la API para la carga masiva de productos al catálogo."""

from fastapi import (
    APIRouter,
    Depends,
    File,
    Form,
    HTTPException,
    Response,
    UploadFile,
    status,
)
from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.orm import Session

from app.application.use_cases.bulk_upload import (
    ERROR_REPORT_FILENAME,
    TEMPLATE_FILENAME,
    IncomingImage,
    build_error_report_workbook as build_error_report_workbook_uc,
    build_template_workbook as build_template_workbook_uc,
    process_bulk_upload as process_bulk_upload_uc,
    upload_bulk_images as upload_bulk_images_uc,
    validate_bulk_upload as validate_bulk_upload_uc,
)
from app.domain.entities import (
    UploadedImage,
    User,
    ValidatedProduct,
    ValidationError,
)
from app.infrastructure.database import get_db
from app.infrastructure.workbooks import EXCEL_CONTENT_TYPE
from app.interfaces.api.dependencies import require_admin
from app.interfaces.api.schemas import (
    BulkUploadCommitRequest,
    BulkUploadResultRead,
    ImageUploadResponse,
    UploadedImageSchema,
    ValidationErrorSchema,
    ValidationResultRead,
)

router = APIRouter(prefix="/bulk-uploads", tags=["bulk_uploads"])

_UPLOADED_IMAGES_ADAPTER = TypeAdapter(list[UploadedImageSchema])


def _http_error(exc: Exception) -> HTTPException:
    if isinstance(exc, PermissionError):
        return HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(exc))
    if isinstance(exc, RuntimeError):
        return HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)
        )
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))


def _parse_uploaded_images(raw: str) -> list[UploadedImage]:
    try:
        images = _UPLOADED_IMAGES_ADAPTER.validate_json(raw or "[]")
    except PydanticValidationError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="La lista de imágenes subidas no es válida",
        ) from exc
    return [
        UploadedImage(file_name=image.file_name, url=image.url, size=image.size)
        for image in images
    ]


def _workbook_response(content: bytes, filename: str) -> Response:
    return Response(
        content=content,
        media_type=EXCEL_CONTENT_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.post("/images", response_model=ImageUploadResponse)
def upload_images(
    images: list[UploadFile] | None = File(default=None),
    current_user: User = Depends(require_admin),
) -> ImageUploadResponse:
    """Sube las imágenes que luego se referencian por nombre en la plantilla."""

    files = [
        IncomingImage(
            file_name=upload.filename or "",
            content_type=upload.content_type,
            data=upload.file.read(),
        )
        for upload in images or []
    ]

    try:
        result = upload_bulk_images_uc(user=current_user, files=files)
    except (PermissionError, RuntimeError, ValueError) as exc:
        raise _http_error(exc) from exc

    message = None
    if result.errors:
        message = f"Algunas imágenes fallaron: {', '.join(result.errors)}"
    return ImageUploadResponse(
        images=[UploadedImageSchema.model_validate(image) for image in result.images],
        errors=result.errors,
        message=message,
    )


@router.post("/validate", response_model=ValidationResultRead)
def validate_products_file(
    file: UploadFile = File(...),
    images: str = Form(default="[]"),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
) -> ValidationResultRead:
    """Valida el Excel de productos y devuelve la vista previa sin crear nada."""

    uploaded_images = _parse_uploaded_images(images)
    file_bytes = file.file.read()

    try:
        result = validate_bulk_upload_uc(
            db,
            user=current_user,
            file_bytes=file_bytes,
            filename=file.filename,
            content_type=file.content_type,
            uploaded_images=uploaded_images,
        )
    except (PermissionError, RuntimeError, ValueError) as exc:
        raise _http_error(exc) from exc

    return ValidationResultRead.model_validate(result)


@router.post("/commit", response_model=BulkUploadResultRead)
def commit_products(
    payload: BulkUploadCommitRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
) -> BulkUploadResultRead:
    """Crea los productos aprobados en la vista previa."""

    products = [ValidatedProduct(**product.model_dump()) for product in payload.products]
    try:
        result = process_bulk_upload_uc(db, user=current_user, products=products)
    except PermissionError as exc:
        raise _http_error(exc) from exc

    return BulkUploadResultRead.model_validate(result)


@router.get("/template")
def download_template(current_user: User = Depends(require_admin)) -> Response:
    """Descarga la plantilla oficial con ejemplos e instrucciones."""

    content = build_template_workbook_uc(user=current_user)
    return _workbook_response(content, TEMPLATE_FILENAME)


@router.post("/error-report")
def download_error_report(
    errors: list[ValidationErrorSchema],
    current_user: User = Depends(require_admin),
) -> Response:
    """Genera un Excel con las filas que fallaron para corregirlas."""

    content = build_error_report_workbook_uc(
        user=current_user,
        errors=[ValidationError(**error.model_dump()) for error in errors],
    )
    return _workbook_response(content, ERROR_REPORT_FILENAME)


__all__ = ["router"]
