"""
core/exceptions.py - a9s 예외 계층

어떤 예외도 브라우저 세션을 끝내지 않는다. 컨트롤러는 잡은 예외를
format_error_for_user()로 한 줄 상태 메시지로 바꿔 표시한다.

    A9sError
    ├── LookupFailure          # 로컬 조회 실패 (원격 호출 없음)
    │   ├── UnknownResourceError
    │   └── NoSelectionError
    ├── ProviderError          # 원격 호출 실패
    │   ├── APICallError       # 조회/작업 API 실패
    │   └── ClientConfigError  # 프로파일/리전 재구성 실패
    └── ConfigError            # 설정 파일/환경변수 오류

Usage:
    try:
        ec2.stop_instances(InstanceIds=[instance_id])
    except ClientError as e:
        raise APICallError.from_client_error("ec2", "stop_instances", e) from e
"""

from typing import Optional


class A9sError(Exception):
    """a9s 기본 예외

    cause가 있으면 str()에 "message: cause" 형태로 붙는다.
    """

    def __init__(self, message: str, cause: Optional[Exception] = None):
        super().__init__(message)
        self.message = message
        self.cause = cause

    def __str__(self) -> str:
        return f"{self.message}: {self.cause}" if self.cause else self.message


# =============================================================================
# 로컬 조회 실패
# =============================================================================


class LookupFailure(A9sError):
    pass


class UnknownResourceError(LookupFailure):
    """레지스트리에 없는 리소스 키"""

    def __init__(self, key: str):
        super().__init__(f"Unknown resource: {key}")
        self.key = key


class NoSelectionError(LookupFailure):
    """작업 대상 행이 없거나 행의 ID가 없음"""

    def __init__(self, action: str, index: Optional[int] = None):
        if index is None:
            reason = "no row selected"
        else:
            reason = f"could not get ID for row {index}"
        super().__init__(f"{action}: {reason}")
        self.action = action
        self.index = index


# =============================================================================
# 원격 호출 실패
# =============================================================================


class ProviderError(A9sError):
    pass


class APICallError(ProviderError):
    """AWS API 호출 실패

    str() 형식: "{service}.{operation} failed ({code}): {aws message}"
    """

    def __init__(
        self,
        service: str,
        operation: str,
        error_code: Optional[str] = None,
        error_message: Optional[str] = None,
        cause: Optional[Exception] = None,
    ):
        parts = [f"{service}.{operation}"]
        if error_code:
            parts.append(f" failed ({error_code})")
        if error_message:
            parts.append(f": {error_message}")
        super().__init__("".join(parts), cause)
        self.service = service
        self.operation = operation
        self.error_code = error_code
        self.error_message = error_message

    @classmethod
    def from_client_error(cls, service: str, operation: str, client_error: Exception) -> "APICallError":
        """ClientError(또는 response 속성이 있는 예외)에서 코드와 메시지를 꺼내 생성"""
        error = getattr(client_error, "response", {}).get("Error", {})
        return cls(
            service,
            operation,
            error_code=error.get("Code"),
            error_message=error.get("Message"),
            cause=client_error,
        )

    def __str__(self) -> str:
        # 원인 메시지가 이미 message에 포함된 경우
        if self.error_code or self.error_message:
            return self.message
        return super().__str__()


class ClientConfigError(ProviderError):
    """프로파일/리전 재구성 실패 (이전 구성은 유지됨)"""

    def __init__(
        self,
        message: str,
        profile: Optional[str] = None,
        region: Optional[str] = None,
        cause: Optional[Exception] = None,
    ):
        super().__init__(message, cause)
        self.profile = profile
        self.region = region


# =============================================================================
# 설정
# =============================================================================


class ConfigError(A9sError):
    """잘못된 설정 값"""

    def __init__(self, key: str, message: str, cause: Optional[Exception] = None):
        super().__init__(f"Config error [{key}]: {message}", cause)
        self.config_key = key


# =============================================================================
# 상태 표시줄 변환
# =============================================================================


def aws_error_code(error: Exception) -> str:
    """AWS 에러 코드 추출 (없으면 빈 문자열)"""
    if isinstance(error, APICallError):
        return error.error_code or ""
    return getattr(error, "response", {}).get("Error", {}).get("Code", "")


def format_error_for_user(error: Exception) -> str:
    """상태 표시줄용 한 줄 메시지"""
    if isinstance(error, A9sError):
        text = str(error)
    elif aws_error_code(error):
        message = error.response["Error"].get("Message") or str(error)  # type: ignore[attr-defined]
        text = f"{aws_error_code(error)}: {message}"
    else:
        text = str(error) or type(error).__name__
    return " ".join(text.split())
