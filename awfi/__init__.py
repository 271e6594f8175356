"""awfi — A[nother] W[ait] F[or] I[t]: wait for an HTTP or Postgres resource to become ready."""

from .checkers import CheckOutcome, FailureCause, HttpChecker, PostgresChecker, ResourceChecker
from .config import PollConfig
from .errors import AwfiError
from .poller import DeadlineExceededError, PollReport, poll_until_ready
from .resources import ResourceKind, ResourceTarget, UnsupportedResourceError, build_checker, classify
