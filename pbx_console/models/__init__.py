from pbx_console.models.company import Company
from pbx_console.models.user import User, UserStatus, IN_USE_STATUSES
from pbx_console.models.account import Account, AccountRole
