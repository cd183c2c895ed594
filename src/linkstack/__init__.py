from .errors import EmptyStackError, LinkStackError
from .stack import Stack, StackNode
