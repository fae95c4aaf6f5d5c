"""String enums for the Brimis 11-step repair process."""

from enum import StrEnum


class WorkflowStep(StrEnum):
    RECEIVING = "step_1_receiving"
    LOGGING = "step_2_logging"
    STRIP_ASSESS = "step_3_strip_assess"
    DOCUMENT_FAULTS = "step_4_document_faults"
    TECHNICAL_REPORT = "step_5_technical_report"
    AWAIT_PO = "step_6_await_po"
    REPAIR = "step_7_repair"
    REASSEMBLE = "step_8_reassemble"
    FUNCTION_TEST = "step_9_function_test"
    QC_INSPECTION = "step_10_qc_inspection"
    DISPATCH = "step_11_dispatch"


class JobStatus(StrEnum):
    RECEIVED = "received"
    LOGGED = "logged"
    STRIPPED = "stripped"
    ASSESSED = "assessed"
    AWAITING_QUOTE_APPROVAL = "awaiting_quote_approval"
    IN_REPAIR = "in_repair"
    ASSEMBLED = "assembled"
    TESTED = "tested"
    READY_FOR_DISPATCH = "ready_for_dispatch"
    DISPATCHED = "dispatched"


class HazmatLevel(StrEnum):
    NONE = "none"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    EXTREME = "extreme"


class PartCondition(StrEnum):
    GOOD = "good"
    REPAIRABLE = "repairable"
    REPLACE = "replace"


class ReportStatus(StrEnum):
    DRAFT = "draft"
    FINAL = "final"
    SENT = "sent"


class QCStatus(StrEnum):
    PASSED = "passed"
    FAILED = "failed"
    CONDITIONAL = "conditional"


class TransitionFailure(StrEnum):
    VALIDATION_FAILED = "validation_failed"
    TERMINAL_STATE = "terminal_state"
    STEP_NOT_ACCESSIBLE = "step_not_accessible"
