"""
CSV header aliases and row conversion for virtual machines
"""
from backend.core.csv_import import NOT_AVAILABLE, CSVImportError, parse_csv, parse_bool

VM_ALIASES = {
    'vm_id': ('vmid', 'vm_id', 'vm id'),
    'vm_name': ('vmname', 'vm_name', 'vm name', 'name'),
    'vm_status': ('vmstatus', 'vm_status', 'vm status', 'status'),
    'vm_ip': ('vmip', 'vm_ip', 'vm ip', 'ip', 'ipaddress', 'ip_address'),
    'internet_access': ('internetaccess', 'internet_access', 'internet access', 'internet'),
    'vm_os': ('vmos', 'vm_os', 'vm os', 'os', 'operating_system'),
    'vm_os_version': ('vmosversion', 'vm_os_version', 'vm os version', 'os_version', 'osversion'),
    'hypervisor': ('hypervisor',),
    'hostname': ('hostname', 'host_name', 'host name'),
    'host_model': ('hostmodel', 'host_model', 'host model', 'model'),
    'host_ip': ('hostip', 'host_ip', 'host ip'),
    'host_os': ('hostos', 'host_os', 'host os'),
    'rack': ('rack',),
    'deployed_by': ('deployedby', 'deployed_by', 'deployed by'),
    'user': ('user',),
    'department': ('department',),
    'start_date': ('startdate', 'start_date', 'start date'),
    'end_date': ('enddate', 'end_date', 'end date'),
    'jira_ticket': ('jiraticket', 'jira_ticket', 'jira ticket', 'ticket'),
    'remarks': ('remarks', 'notes', 'description'),
}

REQUIRED_FIELDS = ('vm_id', 'vm_name', 'hypervisor')

TEXT_FIELDS = ('vm_ip', 'vm_os', 'vm_os_version', 'hostname', 'host_model', 'host_ip', 'host_os',
               'rack', 'deployed_by', 'user', 'department', 'jira_ticket', 'remarks')

# Camel-case headers; lowercased they are VM_ALIASES entries, so exports re-import as-is
VM_EXPORT_COLUMNS = [
    ('vm_id', 'vmId'),
    ('vm_name', 'vmName'),
    ('vm_status', 'vmStatus'),
    ('vm_ip', 'vmIp'),
    ('internet_access', 'internetAccess'),
    ('vm_os', 'vmOs'),
    ('vm_os_version', 'vmOsVersion'),
    ('hypervisor', 'hypervisor'),
    ('hostname', 'hostname'),
    ('host_model', 'hostModel'),
    ('host_ip', 'hostIp'),
    ('host_os', 'hostOs'),
    ('rack', 'rack'),
    ('deployed_by', 'deployedBy'),
    ('user', 'user'),
    ('department', 'department'),
    ('start_date', 'startDate'),
    ('end_date', 'endDate'),
    ('jira_ticket', 'jiraTicket'),
    ('remarks', 'remarks'),
]


def convert_vm(row):
    data = {
        'vm_id': row['vm_id'],
        'vm_name': row['vm_name'],
        'vm_status': row.get('vm_status') or 'Provisioning',
        'internet_access': parse_bool(row.get('internet_access')),
        'hypervisor': row['hypervisor'],
        'start_date': row.get('start_date'),
        'end_date': row.get('end_date'),
        'date_deleted': None,
    }
    for field in TEXT_FIELDS:
        data[field] = row.get(field) or NOT_AVAILABLE
    return data


def vm_records_from_csv(content):
    rows = parse_csv(content, VM_ALIASES, required=REQUIRED_FIELDS, skip_values=(NOT_AVAILABLE,))

    records = []
    for line, row in rows:
        missing = [field for field in REQUIRED_FIELDS if not row.get(field)]
        if missing:
            found = ', '.join(f'{field}: "{row.get(field, "")}"' for field in REQUIRED_FIELDS)
            raise CSVImportError(f'Line {line}: Missing required field(s). {found}', line=line)
        records.append((line, convert_vm(row)))

    if not records:
        raise CSVImportError('No valid VM records found in CSV file')
    return records
