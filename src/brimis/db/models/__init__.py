"""SQLAlchemy ORM models - import all to register with Base.metadata."""

from brimis.db.models.job import JobRow
from brimis.db.models.step_completion import StepCompletionRow
from brimis.db.models.part import JobPartRow
from brimis.db.models.photo import JobPhotoRow
from brimis.db.models.report import TechnicalReportRow
from brimis.db.models.qc_inspection import QCInspectionRow
