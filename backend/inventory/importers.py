"""
CSV header aliases and row conversion for assets, components and accessories
"""
import logging

from backend.core.csv_import import (
    CSVImportError, EXTRA_KEY, NOT_AVAILABLE, parse_csv, parse_int, clean_number, normalize_choice, default_columns,
)
from .models import Asset, Accessory, generate_asset_tag

logger = logging.getLogger('backend.inventory')

IMPORT_NOTE = 'Imported via CSV'

ASSET_ALIASES = {
    'knox_id': ('knoxid', 'knox_id', 'knox id'),
    'serial_number': ('serialnumber', 'serial_number', 'serial number', 'serial'),
    'asset_tag': ('assettag', 'asset tag', 'asset_tag', 'tag'),
    'name': ('name', 'asset name', 'asset_name', 'devicename', 'device_name', 'device name'),
    'category': ('category', 'type', 'device type', 'device_type'),
    'status': ('status', 'state'),
    'condition': ('condition', 'asset_condition', 'asset condition'),
    'model': ('model', 'model_number', 'model number'),
    'manufacturer': ('manufacturer', 'brand', 'make', 'vendor'),
    'purchase_date': ('purchasedate', 'purchase_date', 'purchase date', 'acquired_date',
                      'acquired date', 'dateacquired', 'date_acquired'),
    'purchase_cost': ('purchasecost', 'purchase_cost', 'purchase cost', 'cost', 'price', 'value'),
    'location': ('location', 'site', 'office', 'building', 'room'),
    'ip_address': ('ipaddress', 'ip address', 'ip_address', 'ip'),
    'mac_address': ('macaddress', 'mac address', 'mac_address', 'mac'),
    'os_type': ('ostype', 'os type', 'os_type', 'os', 'operating_system', 'operating system'),
    'department': ('department', 'dept', 'division', 'unit'),
    'description': ('description', 'comments', 'remarks'),
    'notes': ('notes',),
    'warranty': ('warranty', 'warranty_date', 'warranty date', 'warranty_expiry', 'warranty expiry'),
    'supplier': ('supplier', 'vendor_name', 'vendor name'),
}

# Components and accessories share one column layout; accessories add status
STOCK_ITEM_ALIASES = {
    'name': ('name',),
    'category': ('category',),
    'quantity': ('quantity', 'qty'),
    'serial_number': ('serialnumber', 'serial number', 'serial_number'),
    'manufacturer': ('manufacturer',),
    'model': ('model',),
    'notes': ('notes',),
}

ACCESSORY_ALIASES = dict(STOCK_ITEM_ALIASES, status=('status',))

BAD_CONDITIONS = ('bad', 'poor', 'damaged')
GOOD_CONDITIONS = ('good', 'excellent', 'working')


def map_condition(value):
    """Fold common condition wording onto Good/Bad, keep anything else verbatim"""
    if not value or not value.strip():
        return Asset.CONDITION_GOOD
    condition = value.strip()
    if condition.lower() in BAD_CONDITIONS:
        return Asset.CONDITION_BAD
    if condition.lower() in GOOD_CONDITIONS:
        return Asset.CONDITION_GOOD
    return condition


def map_accessory_status(value):
    if not value:
        return 'available'
    status = value.lower()
    for keyword in ('borrowed', 'returned', 'defective'):
        if keyword in status:
            return keyword
    return 'available'


def convert_asset(row, index):
    category = row.get('category') or 'Laptop'
    asset_tag = row.get('asset_tag')
    if not asset_tag:
        asset_tag = generate_asset_tag(category, index)
        logger.debug(f"Generated asset tag {asset_tag} for CSV row {index + 1}")
    return {
        'asset_tag': asset_tag,
        'name': row.get('name'),
        'serial_number': row.get('serial_number', ''),
        'category': category,
        'status': normalize_choice(row.get('status'), Asset.STATUS_CHOICES, default='available'),
        'condition': map_condition(row.get('condition')),
        'model': row.get('model'),
        'manufacturer': row.get('manufacturer'),
        'purchase_date': row.get('purchase_date'),
        'purchase_cost': clean_number(row.get('purchase_cost')),
        'location': row.get('location'),
        'knox_id': row.get('knox_id'),
        'ip_address': row.get('ip_address'),
        'mac_address': row.get('mac_address'),
        'os_type': row.get('os_type'),
        'department': row.get('department'),
        'description': row.get('description'),
        'warranty': row.get('warranty'),
        'supplier': row.get('supplier'),
        'notes': row.get('notes'),
        'custom_fields': row.get(EXTRA_KEY, {}),
    }


def asset_records_from_csv(content):
    """No required columns; short/long rows are tolerated and 'N/A' counts as empty"""
    rows = parse_csv(content, ASSET_ALIASES, strict=False, skip_values=(NOT_AVAILABLE,), keep_unknown=True)
    return [(line, convert_asset(row, index)) for index, (line, row) in enumerate(rows)]


def _stock_item_fields(line, row):
    if not row.get('name') or not row.get('category'):
        raise CSVImportError(f'Line {line} is missing required values', line=line)
    try:
        quantity = parse_int(row.get('quantity'), default=1)
    except ValueError:
        raise CSVImportError(f"Line {line}: quantity '{row.get('quantity')}' is not a whole number", line=line)
    return {
        'name': row['name'],
        'category': row['category'],
        'quantity': quantity,
        'serial_number': row.get('serial_number'),
        'manufacturer': row.get('manufacturer'),
        'model': row.get('model'),
        'notes': row.get('notes') or IMPORT_NOTE,
    }


def component_records_from_csv(content):
    rows = parse_csv(content, STOCK_ITEM_ALIASES, required=('name', 'category'))
    return [(line, _stock_item_fields(line, row)) for line, row in rows]


def accessory_records_from_csv(content):
    rows = parse_csv(content, ACCESSORY_ALIASES, required=('name', 'category'))
    records = []
    for line, row in rows:
        data = _stock_item_fields(line, row)
        data['status'] = map_accessory_status(row.get('status'))
        data['assigned_to'] = None
        records.append((line, data))
    return records


ASSET_EXPORT_COLUMNS = [
    ('asset_tag', 'Asset Tag'),
    ('name', 'Name'),
    ('serial_number', 'Serial Number'),
    ('category', 'Category'),
    ('status', 'Status'),
    ('condition', 'Condition'),
    ('model', 'Model'),
    ('manufacturer', 'Manufacturer'),
    ('purchase_date', 'Purchase Date'),
    ('purchase_cost', 'Purchase Cost'),
    ('location', 'Location'),
    ('knox_id', 'Knox ID'),
    ('ip_address', 'IP Address'),
    ('mac_address', 'MAC Address'),
    ('os_type', 'OS Type'),
    ('department', 'Department'),
    ('description', 'Description'),
    ('warranty', 'Warranty'),
    ('supplier', 'Supplier'),
    ('notes', 'Notes'),
]

COMPONENT_EXPORT_COLUMNS = default_columns(STOCK_ITEM_ALIASES)

ACCESSORY_EXPORT_COLUMNS = COMPONENT_EXPORT_COLUMNS[:2] + [('status', 'Status')] + COMPONENT_EXPORT_COLUMNS[2:] + [
    ('assigned_to_username', 'Assigned To'),
]
