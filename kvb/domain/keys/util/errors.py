"""Translation of store error replies into KVB errors.

The only place store replies are classified; scanner and type-info
strategies let ReplyError propagate untouched.
"""

from kvb.domain.keys.messages import NO_PERMISSION, STORE_ERROR
from kvb.domain.keys.port.client import ReplyError
from kvb.domain.shared.error import ForbiddenError, KVBError, StoreCommandError

NO_PERMISSION_CODE = "NOPERM"
COMMAND_SYNTAX_ERROR = "syntax error"
NO_SUCH_KEY = "no such key"
UNKNOWN_COMMAND = "unknown command"


def is_no_permission(error: Exception) -> bool:
    return isinstance(error, ReplyError) and NO_PERMISSION_CODE in error.message


def is_syntax_error(error: Exception) -> bool:
    return isinstance(error, ReplyError) and COMMAND_SYNTAX_ERROR in error.message.lower()


def is_no_such_key(error: Exception) -> bool:
    return isinstance(error, ReplyError) and NO_SUCH_KEY in error.message.lower()


def is_unknown_command(error: Exception) -> bool:
    return isinstance(error, ReplyError) and UNKNOWN_COMMAND in error.message.lower()


def translate_store_error(error: ReplyError) -> KVBError:
    if is_no_permission(error):
        return ForbiddenError(error.message or NO_PERMISSION, code=NO_PERMISSION_CODE)
    return StoreCommandError(STORE_ERROR, code="STORE_ERROR")
