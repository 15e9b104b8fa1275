"""
tests/parallel/test_parallel_error_collector.py - Error classification and collection
"""

from botocore.exceptions import ClientError

from cloud_inventory.exceptions import ServiceCollectionError
from cloud_inventory.parallel.errors import (
    ErrorCollector,
    ErrorSeverity,
    categorize_error,
    categorize_error_code,
    get_error_code,
    try_or_default,
)
from cloud_inventory.parallel.types import ErrorCategory


def _client_error(code, operation="DescribeInstances"):
    return ClientError({"Error": {"Code": code, "Message": f"{code} happened"}}, operation)


class FakeServiceError(Exception):
    """Shape of oci.exceptions.ServiceError"""

    def __init__(self, status, code):
        super().__init__(code)
        self.status = status
        self.code = code


class TestCategorize:
    """categorize_error / categorize_error_code"""

    def test_error_codes(self):
        assert categorize_error_code("AccessDenied") == ErrorCategory.ACCESS_DENIED
        assert categorize_error_code("NoSuchBucket") == ErrorCategory.NOT_FOUND
        assert categorize_error_code("Throttling") == ErrorCategory.THROTTLING
        assert categorize_error_code("RequestTimeout") == ErrorCategory.TIMEOUT
        assert categorize_error_code("ExpiredToken") == ErrorCategory.EXPIRED_TOKEN
        assert categorize_error_code("InvalidParameterValue") == ErrorCategory.INVALID_REQUEST
        assert categorize_error_code("InternalError") == ErrorCategory.SERVICE_ERROR
        assert categorize_error_code("Whatever") == ErrorCategory.UNKNOWN

    def test_client_error(self):
        assert categorize_error(_client_error("UnauthorizedOperation")) == ErrorCategory.ACCESS_DENIED
        assert categorize_error(_client_error("RequestLimitExceeded")) == ErrorCategory.THROTTLING
        assert get_error_code(_client_error("NoSuchEntity")) == "NoSuchEntity"

    def test_oci_style_error(self):
        assert categorize_error(FakeServiceError(404, "NotFound")) == ErrorCategory.NOT_FOUND
        assert categorize_error(FakeServiceError(404, "NotAuthorizedOrNotFound")) == ErrorCategory.ACCESS_DENIED
        assert categorize_error(FakeServiceError(429, "TooManyRequests")) == ErrorCategory.THROTTLING
        assert categorize_error(FakeServiceError(503, "Unavailable")) == ErrorCategory.SERVICE_ERROR

    def test_plain_exceptions(self):
        assert categorize_error(TimeoutError()) == ErrorCategory.TIMEOUT
        assert categorize_error(ConnectionResetError()) == ErrorCategory.NETWORK
        assert categorize_error(ValueError("x")) == ErrorCategory.UNKNOWN
        assert get_error_code(ValueError("x")) == "ValueError"


class TestErrorCollector:
    """ErrorCollector"""

    def test_unwraps_inventory_errors(self):
        collector = ErrorCollector("aws")

        collected = collector.collect(
            ServiceCollectionError("ec2", _client_error("AccessDenied"), region="us-east-1"),
            "ec2",
            "us-east-1",
            severity=ErrorSeverity.CRITICAL,
        )

        assert collected.error_type == "ClientError"
        assert collected.error_code == "AccessDenied"
        assert collected.category == ErrorCategory.ACCESS_DENIED
        assert str(collected) == "[CRITICAL] aws:ec2/us-east-1 - collect: AccessDenied"

    def test_log_sink_receives_level_and_meta(self):
        calls = []
        collector = ErrorCollector("aws", lambda level, message, meta: calls.append((level, message, meta)))

        collector.collect(ValueError("bad"), "s3", operation="get_bucket_tagging", resource_id="bucket-1")

        [(level, message, meta)] = calls
        assert level == "warn"
        assert "bucket-1" in message
        assert meta["operation"] == "get_bucket_tagging"
        assert meta["severity"] == "warning"

    def test_summary_and_filtering(self):
        collector = ErrorCollector("aws")
        assert collector.get_summary() == "no errors"

        collector.collect(ValueError("a"), "ec2", severity=ErrorSeverity.CRITICAL)
        collector.collect(ValueError("b"), "ec2")
        collector.collect(ValueError("c"), "s3")

        assert collector.get_summary() == "3 errors (critical: 1, warning: 2)"
        assert len(collector.for_service("ec2")) == 2
        collector.clear()
        assert not collector.has_errors


class TestTryOrDefault:
    """try_or_default"""

    def test_success(self):
        assert try_or_default(lambda: [1], []) == [1]

    def test_failure_returns_default_and_collects(self):
        collector = ErrorCollector("aws")

        def boom():
            raise _client_error("NoSuchTagSet", "GetBucketTagging")

        result = try_or_default(boom, [], collector=collector, service="s3", operation="get_bucket_tagging")

        assert result == []
        [error] = collector.errors
        assert error.severity == ErrorSeverity.DEBUG
        assert error.category == ErrorCategory.NOT_FOUND

    def test_failure_without_collector(self):
        assert try_or_default(lambda: 1 / 0, "default") == "default"
