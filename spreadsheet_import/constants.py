"""
Constants for spreadsheet import functionality.
"""

# Notification severities
SEVERITY_SUCCESS = "success"
SEVERITY_DANGER = "danger"

# Defaults
DEFAULT_DISK = "default"
DEFAULT_CSV_ENCODING = "utf-8-sig"

# Supported file extensions
CSV_EXTENSIONS = {".csv", ".txt"}
XLSX_EXTENSIONS = {".xlsx", ".xlsm"}

# Report titles and bodies
IMPORT_SUCCEEDED_TITLE = "Import succeeded"
IMPORT_SUCCEEDED = "{count} rows imported, {skipped} skipped"
IMPORT_FAILED_TITLE = "Import failed"
IMPORT_FAILED = "The import was cancelled and no rows were saved. Please check your file and try again."
ERROR_IMPORTING_FILE_TITLE = "Error importing file"
VALIDATION_LINE_MESSAGE = "Line {line}: {error}"

# Error messages
ERROR_ROWS_LIMIT_EXCEEDED = "The import file is too large. The maximum number of rows allowed is {limit}."
ERROR_UNSUPPORTED_FILE_TYPE = "Unsupported file type '{extension}'. Only CSV and XLSX files are supported"
ERROR_MISSING_SOURCE = "No spreadsheet file provided"
ERROR_MISSING_MODEL = "No target model configured"
ERROR_MODEL_NOT_FOUND = "Model '{model}' not found in Django apps"
ERROR_MISSING_FORM_SCHEMA = "No form schema configured for field '{field}'"
ERROR_INVALID_COLUMN = "Column for field '{field}' must be a non-negative integer, got {column!r}"
ERROR_UNKNOWN_RULE = "Unknown validation rule '{rule}'"
ERROR_INVALID_RULE_ARGUMENT = "Invalid argument for validation rule '{rule}': {argument}"
ERROR_VALIDATOR_ENGINE = "Validation of field '{field}' failed unexpectedly: {error}"
ERROR_PATH_CONFLICT = "Field '{path}' conflicts with a value already set at '{prefix}'"

# Validation messages
VALIDATION_REQUIRED = "This field is required."
VALIDATION_STRING = "This value must be text."
VALIDATION_INTEGER = "Enter a whole number."
VALIDATION_NUMERIC = "Enter a number."
VALIDATION_BOOLEAN = "Enter a valid boolean."
VALIDATION_DATE = "Enter a valid date."
VALIDATION_DIGITS = "Ensure this value has exactly {digits} digits."
VALIDATION_SIZE_VALUE = "Ensure this value is equal to {size}."
VALIDATION_SIZE_LENGTH = "Ensure this value has exactly {size} characters (it has {length})."
VALIDATION_IN = "Select a valid choice. {value} is not one of the available choices."
VALIDATION_NOT_IN = "{value} is not allowed."
VALIDATION_ALPHA = "This value may only contain letters."
VALIDATION_ALPHA_NUM = "This value may only contain letters and numbers."
VALIDATION_REGEX = "Enter a valid value."
VALIDATION_FIELD_ERROR = "{attribute}: {message}"

# Log messages
LOG_IMPORT_STARTED = "Import started for {model} from {source}"
LOG_IMPORT_COMPLETED = "Import completed for {model}: {created} created, {skipped} skipped"
LOG_IMPORT_ROLLED_BACK = "Import rolled back for {model} at line {line}: {error}"
LOG_DUPLICATE_SKIPPED = "Skipping line {line}: {field}={value!r} already exists"
LOG_MISSING_UNIQUE_VALUE = "Unique field '{field}' has no value at line {line}"
