from .user import (
    user_schema,
    register_schema,
    login_schema,
    profile_update_schema,
    change_password_schema,
)
from .record import (
    record_schema,
    records_schema,
    record_update_schema,
    vital_sign_schema,
    record_list_query_schema,
    statistics_query_schema,
    SORTABLE_FIELDS,
)
