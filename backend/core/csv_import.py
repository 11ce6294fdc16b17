"""
CSV parsing, header-alias mapping and export helpers shared by every importable entity.

Each entity describes its columns as an alias table::

    ASSET_ALIASES = {
        'serial_number': ('serialnumber', 'serial_number', 'serial number', 'serial'),
        ...
    }

``parse_csv`` resolves the (case-insensitive) header row through that table and
returns ``(line_number, {field: value})`` pairs that the entity's converter turns
into serializer input.
"""
import csv
import io
import logging
import re

from django.conf import settings
from django.http import HttpResponse

logger = logging.getLogger('backend.core.csv')

EXTRA_KEY = 'extra'
NOT_AVAILABLE = 'N/A'
EXCEL_EXTENSIONS = ('xlsx', 'xls')
TRUE_VALUES = ('true', 'yes', '1')


class CSVImportError(Exception):
    """Raised when an uploaded CSV cannot be turned into records"""

    def __init__(self, message, line=None):
        super().__init__(message)
        self.message = message
        self.line = line


def read_csv_upload(uploaded_file):
    """Validate an uploaded file and return its decoded text"""
    name = (getattr(uploaded_file, 'name', '') or '').lower()
    extension = name.rsplit('.', 1)[-1] if '.' in name else ''

    if extension in EXCEL_EXTENSIONS:
        raise CSVImportError(
            'Excel files are not directly supported. Please save your Excel file as CSV '
            'format and upload the CSV file instead.'
        )
    if extension != 'csv':
        raise CSVImportError('Unsupported file format. Please upload a CSV file.')

    max_bytes = settings.CSV_IMPORT_MAX_BYTES
    size = getattr(uploaded_file, 'size', None)
    if size is not None and size > max_bytes:
        raise CSVImportError(f'CSV file is too large ({size} bytes, limit is {max_bytes} bytes)')

    raw = uploaded_file.read()
    try:
        return raw.decode('utf-8-sig')
    except UnicodeDecodeError:
        raise CSVImportError('Failed to read CSV file: the file must be UTF-8 encoded')


def build_alias_lookup(aliases):
    """Flatten {field: (alias, ...)} into {normalized header: field}"""
    lookup = {}
    for field, names in aliases.items():
        lookup[field.lower()] = field
        for name in names:
            lookup[name.strip().lower()] = field
    return lookup


def parse_csv(content, aliases, required=(), strict=True, skip_values=(), keep_unknown=False):
    """
    Parse CSV text into ``[(line_number, record)]``.

    Args:
        content: CSV text with a header row
        aliases: {field: tuple of accepted header spellings}
        required: fields that some header must map to
        strict: raise on rows whose column count differs from the header;
                otherwise pad short rows and truncate long ones
        skip_values: cell values treated as absent (e.g. 'N/A')
        keep_unknown: keep unmapped columns under record['extra'] instead of dropping them

    Blank cells never produce a key, so converters can apply defaults with ``dict.get``.
    """
    lookup = build_alias_lookup(aliases)
    reader = csv.reader(io.StringIO(content), skipinitialspace=True)

    header_row = None
    data_rows = []
    try:
        for row in reader:
            if any(cell.strip() for cell in row):
                header_row = row
                break

        for row in reader:
            if any(cell.strip() for cell in row):
                data_rows.append((reader.line_num, row))
    except csv.Error as e:
        raise CSVImportError(f"Line {reader.line_num}: {e}", line=reader.line_num)

    if header_row is None or not data_rows:
        raise CSVImportError('CSV file must contain at least a header row and one data row')

    headers = [header.strip().lower() for header in header_row]
    fields = [lookup.get(header) for header in headers]

    missing = [field for field in required if field not in fields]
    if missing:
        raise CSVImportError(f"CSV file is missing required headers: {', '.join(missing)}")

    records = []
    empty_rows = 0
    for line, values in data_rows:
        if len(values) != len(headers):
            if strict:
                raise CSVImportError(
                    f'Line {line} has {len(values)} values, but header has {len(headers)} columns',
                    line=line,
                )
            if len(values) > len(headers):
                logger.warning(f"Line {line} has {len(values)} values, but header has {len(headers)} columns. Truncating extra values.")
                values = values[:len(headers)]
            else:
                values = values + [''] * (len(headers) - len(values))

        record = {}
        extra = {}
        for header, field, cell in zip(headers, fields, values):
            value = cell.strip()
            if not value or value in skip_values:
                continue
            if field:
                record[field] = value
            elif keep_unknown and header:
                extra[header] = value

        if extra:
            record[EXTRA_KEY] = extra

        if not record:
            empty_rows += 1
            logger.debug(f"Skipping empty data row {line}")
            continue

        records.append((line, record))

    logger.info(f"CSV parsing completed: {len(records)} rows parsed, {empty_rows} empty rows skipped")
    return records


def parse_bool(value):
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in TRUE_VALUES


def parse_int(value, default=None):
    """Parse an integer cell; blank gives ``default``, garbage raises ValueError"""
    if value is None or str(value).strip() == '':
        return default
    return int(str(value).strip())


def clean_number(value):
    """Strip currency symbols and thousands separators ('$1,299.00' -> '1299.00')"""
    if value is None:
        return None
    cleaned = re.sub(r'[^0-9.\-]', '', str(value))
    return cleaned or None


def normalize_choice(value, choices, default=None):
    """
    Match a free-text value against model choices by key or label, ignoring case
    and treating spaces, hyphens and underscores alike. Unknown values are returned
    unchanged so serializer validation can reject them.
    """
    if value is None or str(value).strip() == '':
        return default

    def squash(text):
        return re.sub(r'[\s_\-]+', '', str(text).strip().lower())

    wanted = squash(value)
    for key, label in choices:
        if squash(key) == wanted or squash(label) == wanted:
            return key
    return str(value).strip()


def default_columns(fields):
    """Infer (key, label) pairs: 'purchase_date' -> 'Purchase Date'"""
    return [(field, field.replace('_', ' ').title()) for field in fields]


def format_csv_value(value):
    if value is None:
        return ''
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, (dict, list)):
        return '' if not value else str(value)
    return str(value)


def render_csv(rows, columns):
    """Render rows (dicts or objects) as CSV text with a label header"""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator='\n')
    writer.writerow([label for _, label in columns])
    for row in rows:
        writer.writerow([
            format_csv_value(row.get(key) if isinstance(row, dict) else getattr(row, key, None))
            for key, _ in columns
        ])
    return buffer.getvalue()


def csv_response(rows, columns, filename):
    """HttpResponse carrying a CSV attachment"""
    response = HttpResponse(render_csv(rows, columns), content_type='text/csv; charset=utf-8')
    response['Content-Disposition'] = f'attachment; filename="{filename}"'
    return response
