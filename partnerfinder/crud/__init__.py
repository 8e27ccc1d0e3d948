from .user import (
    authenticate,
    create_user,
    get_user_by_email,
    get_user_by_id,
    get_user_by_username,
    search_partners,
    update_user,
)
from .relationship import (
    create_relationship,
    get_relationship,
    mark_accepted,
    pair_key,
)
