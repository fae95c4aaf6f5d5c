"""Job intake and the data the workflow gates check: hazmat, quote/PO,
parts, photos, technical report and QC inspections."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from brimis.config import settings
from brimis.db.base import utcnow
from brimis.db.models.job import JobRow
from brimis.dependencies import get_db, job_log_context
from brimis.errors.exceptions import NotFoundError, RequestValidationError
from brimis.models.enums import ReportStatus
from brimis.models.job import HazmatUpdate, Job, JobCreate, PurchaseOrderReceipt, QuoteUpdate
from brimis.models.part import JobPart, JobPartCreate
from brimis.models.photo import JobPhoto, JobPhotoCreate
from brimis.models.qc_inspection import QCInspection, QCInspectionCreate
from brimis.models.report import TechnicalReport, TechnicalReportDraft
from brimis.repositories.job_repo import JobRepository
from brimis.repositories.part_repo import JobPartRepository
from brimis.repositories.photo_repo import JobPhotoRepository
from brimis.repositories.qc_inspection_repo import QCInspectionRepository
from brimis.repositories.report_repo import TechnicalReportRepository
from brimis.services.id_generator import generate_id
from brimis.services.job_intake import create_job

router = APIRouter(tags=["Jobs"], dependencies=[Depends(job_log_context)])


async def _require_job(db: AsyncSession, job_id: str) -> JobRow:
    row = await JobRepository(db).get(job_id)
    if not row:
        raise NotFoundError("Job", job_id)
    return row


def _job_response(row: JobRow) -> dict:
    return Job.model_validate(row).model_dump(mode="json", exclude_none=True)


@router.post("/jobs", status_code=201)
async def create_job_route(body: JobCreate, db: AsyncSession = Depends(get_db)) -> dict:
    row = await create_job(db, body, prefix=settings.job_number_prefix)
    await db.commit()
    return _job_response(row)


@router.get("/jobs/{job_id}")
async def get_job(job_id: str, db: AsyncSession = Depends(get_db)) -> dict:
    return _job_response(await _require_job(db, job_id))


@router.post("/jobs/{job_id}/hazmat")
async def record_hazmat(job_id: str, body: HazmatUpdate, db: AsyncSession = Depends(get_db)) -> dict:
    row = await _require_job(db, job_id)
    fields = {
        "has_hazmat": body.has_hazmat,
        "hazmat_level": body.hazmat_level,
        "hazmat_notes": body.hazmat_notes,
    }
    if body.hazmat_cleaned:
        if not body.hazmat_cleaned_by:
            raise RequestValidationError("hazmat_cleaned_by is required when recording a clean")
        fields.update(
            hazmat_cleaned=True,
            hazmat_cleaned_at=utcnow(),
            hazmat_cleaned_by=body.hazmat_cleaned_by,
        )
    elif body.has_hazmat:
        # re-flagged hazmat needs a fresh clean
        fields.update(hazmat_cleaned=False, hazmat_cleaned_at=None, hazmat_cleaned_by=None)
    await JobRepository(db).update(row, **fields)
    await db.commit()
    return _job_response(row)


@router.post("/jobs/{job_id}/quote")
async def record_quote(job_id: str, body: QuoteUpdate, db: AsyncSession = Depends(get_db)) -> dict:
    row = await _require_job(db, job_id)
    await JobRepository(db).update(row, quote_amount=body.amount, quote_sent_at=utcnow())
    await db.commit()
    return _job_response(row)


@router.post("/jobs/{job_id}/purchase-order")
async def record_purchase_order(
    job_id: str, body: PurchaseOrderReceipt, db: AsyncSession = Depends(get_db)
) -> dict:
    """Record the client's PO. The job stays at its step until advanced."""
    row = await _require_job(db, job_id)
    now = utcnow()
    await JobRepository(db).update(
        row, po_number=body.po_number, po_received_at=now, quote_approved_at=now
    )
    await db.commit()
    return _job_response(row)


@router.post("/jobs/{job_id}/parts", status_code=201)
async def add_part(job_id: str, body: JobPartCreate, db: AsyncSession = Depends(get_db)) -> dict:
    await _require_job(db, job_id)
    row = await JobPartRepository(db).create(
        part_id=generate_id("part_"), job_id=job_id, **body.model_dump()
    )
    await db.commit()
    return JobPart.model_validate(row).model_dump(mode="json", exclude_none=True)


@router.get("/jobs/{job_id}/parts")
async def list_parts(job_id: str, db: AsyncSession = Depends(get_db)) -> list[dict]:
    await _require_job(db, job_id)
    rows = await JobPartRepository(db).list_by_job(job_id)
    return [JobPart.model_validate(r).model_dump(mode="json", exclude_none=True) for r in rows]


@router.post("/jobs/{job_id}/photos", status_code=201)
async def add_photo(job_id: str, body: JobPhotoCreate, db: AsyncSession = Depends(get_db)) -> dict:
    await _require_job(db, job_id)
    row = await JobPhotoRepository(db).create(
        photo_id=generate_id("photo_"), job_id=job_id, taken_at=utcnow(), **body.model_dump()
    )
    await db.commit()
    return JobPhoto.model_validate(row).model_dump(mode="json", exclude_none=True)


@router.put("/jobs/{job_id}/report")
async def save_report(
    job_id: str, body: TechnicalReportDraft, db: AsyncSession = Depends(get_db)
) -> dict:
    """Create the job's report as a draft, or update its content in place."""
    await _require_job(db, job_id)
    repo = TechnicalReportRepository(db)
    row = await repo.get_by_job(job_id)
    if row:
        await repo.update(row, **body.model_dump())
    else:
        row = await repo.create(
            report_id=generate_id("rpt_"), job_id=job_id, status=ReportStatus.DRAFT, **body.model_dump()
        )
    await db.commit()
    return TechnicalReport.model_validate(row).model_dump(mode="json", exclude_none=True)


async def _set_report_status(db: AsyncSession, job_id: str, status: ReportStatus) -> dict:
    repo = TechnicalReportRepository(db)
    row = await repo.get_by_job(job_id)
    if not row:
        raise NotFoundError("TechnicalReport", job_id)
    fields = {"status": status}
    if status is ReportStatus.SENT:
        fields["sent_at"] = utcnow()
    await repo.update(row, **fields)
    await db.commit()
    return TechnicalReport.model_validate(row).model_dump(mode="json", exclude_none=True)


@router.post("/jobs/{job_id}/report/finalize")
async def finalize_report(job_id: str, db: AsyncSession = Depends(get_db)) -> dict:
    await _require_job(db, job_id)
    return await _set_report_status(db, job_id, ReportStatus.FINAL)


@router.post("/jobs/{job_id}/report/send")
async def send_report(job_id: str, db: AsyncSession = Depends(get_db)) -> dict:
    row = await _require_job(db, job_id)
    await JobRepository(db).update(row, quote_sent_at=utcnow())
    return await _set_report_status(db, job_id, ReportStatus.SENT)


@router.post("/jobs/{job_id}/qc-inspections", status_code=201)
async def submit_qc_inspection(
    job_id: str, body: QCInspectionCreate, db: AsyncSession = Depends(get_db)
) -> dict:
    """Append an inspection attempt. Dispatch still requires an explicit advance."""
    await _require_job(db, job_id)
    row = await QCInspectionRepository(db).create(
        inspection_id=generate_id("qc_"), job_id=job_id, inspected_at=utcnow(), **body.model_dump()
    )
    await db.commit()
    return QCInspection.model_validate(row).model_dump(mode="json", exclude_none=True)


@router.get("/jobs/{job_id}/qc-inspections")
async def list_qc_inspections(job_id: str, db: AsyncSession = Depends(get_db)) -> list[dict]:
    await _require_job(db, job_id)
    rows = await QCInspectionRepository(db).list_by_job(job_id)
    return [QCInspection.model_validate(r).model_dump(mode="json", exclude_none=True) for r in rows]
