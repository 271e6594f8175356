"""Resource checkers — one probe attempt per call, HTTP(S) and Postgres."""

from .base import CheckOutcome, FailureCause, ResourceChecker
from .http import HttpChecker
from .postgres import PostgresChecker
