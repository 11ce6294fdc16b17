"""
CSV header aliases, row conversion and the downloadable template for IAM accounts
"""
from backend.core.csv_import import NOT_AVAILABLE, parse_csv, normalize_choice
from .models import IAMAccount

IAM_ALIASES = {
    'requestor': ('requestor',),
    'knox_id': ('knoxid', 'knox_id', 'knox id'),
    'permission': ('permission', 'permission/iam/scop'),
    'duration_start_date': ('durationstartdate', 'duration_start_date', 'duration start date'),
    'duration_end_date': ('durationenddate', 'duration_end_date', 'duration end date'),
    'cloud_platform': ('cloudplatform', 'cloud_platform', 'cloud platform'),
    'project_accounts': ('projectaccounts', 'project_accounts', 'project accounts'),
    'approval_id': ('approvalid', 'approval_id', 'approval id'),
    'remarks': ('remarks', 'notes'),
    'status': ('status',),
}

REQUIRED_FIELDS = ('requestor', 'knox_id', 'permission', 'cloud_platform')

IAM_EXPORT_COLUMNS = [
    ('requestor', 'Requestor'),
    ('knox_id', 'Knox ID'),
    ('permission', 'Permission/IAM/SCOP'),
    ('duration_start_date', 'Duration Start Date'),
    ('duration_end_date', 'Duration End Date'),
    ('cloud_platform', 'Cloud Platform'),
    ('project_accounts', 'Project Accounts'),
    ('approval_id', 'Approval ID'),
    ('remarks', 'Remarks'),
    ('status', 'Status'),
]

TEMPLATE_COLUMNS = [
    ('requestor', 'requestor'),
    ('knox_id', 'knoxId'),
    ('permission', 'permission'),
    ('duration_start_date', 'durationStartDate'),
    ('duration_end_date', 'durationEndDate'),
    ('cloud_platform', 'cloudPlatform'),
    ('project_accounts', 'projectAccounts'),
    ('approval_id', 'approvalId'),
    ('remarks', 'remarks'),
    ('status', 'status'),
]

TEMPLATE_ROWS = [
    {
        'requestor': 'John Doe',
        'knox_id': 'KNOX001',
        'permission': 'IAM:ReadOnly',
        'duration_start_date': '2024-01-15',
        'duration_end_date': '2024-07-15',
        'cloud_platform': 'AWS',
        'project_accounts': 'dev-account-001',
        'approval_id': 'APV-2024-001',
        'remarks': 'Development access for Q1 project',
        'status': 'active',
    },
    {
        'requestor': 'Jane Smith',
        'knox_id': 'KNOX002',
        'permission': 'IAM:FullAccess',
        'duration_start_date': '2024-02-01',
        'duration_end_date': '2024-08-01',
        'cloud_platform': 'Azure',
        'project_accounts': 'prod-account-002',
        'approval_id': 'APV-2024-002',
        'remarks': 'Production environment access',
        'status': 'active',
    },
]


def convert_iam_account(row):
    return {
        'requestor': row['requestor'],
        'knox_id': row['knox_id'],
        'permission': row['permission'],
        'duration_start_date': row.get('duration_start_date'),
        'duration_end_date': row.get('duration_end_date'),
        'cloud_platform': row['cloud_platform'],
        'project_accounts': row.get('project_accounts'),
        'approval_id': row.get('approval_id'),
        'remarks': row.get('remarks'),
        'status': normalize_choice(row.get('status'), IAMAccount.STATUS_CHOICES, default='active'),
    }


def iam_records_from_csv(content):
    """Rows lacking any required value are dropped without an error"""
    rows = parse_csv(content, IAM_ALIASES, skip_values=(NOT_AVAILABLE,))
    return [
        (line, convert_iam_account(row))
        for line, row in rows
        if all(row.get(field) for field in REQUIRED_FIELDS)
    ]
