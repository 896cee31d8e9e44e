"""
tests/core/test_core_client.py - core/client 테스트
"""

from unittest.mock import MagicMock

import pytest
from moto import mock_aws

from core.client import CLIENT_CONFIG, AWSClient, is_valid_region_name
from core.config import settings
from core.exceptions import ClientConfigError


class TestRegionName:
    @pytest.mark.parametrize("region", ["us-east-1", "ap-northeast-2", "us-gov-west-1", "cn-north-1"])
    def test_valid(self, region):
        assert is_valid_region_name(region)

    @pytest.mark.parametrize("region", ["", "useast1", "US-EAST-1", "mars", "us-east"])
    def test_invalid(self, region):
        assert not is_valid_region_name(region)


class TestClientConfig:
    def test_retry_config(self):
        """adaptive retry와 타임아웃이 적용된 client"""
        client = AWSClient(region="eu-west-1").service("ec2")
        assert client.meta.region_name == "eu-west-1"
        assert client.meta.config.retries["mode"] == "adaptive"
        assert CLIENT_CONFIG.retries["max_attempts"] == settings.API_MAX_ATTEMPTS
        assert client.meta.config.read_timeout == settings.API_READ_TIMEOUT

    def test_session_client_receives_config(self):
        session = MagicMock(region_name="us-east-1")
        client = AWSClient(session_factory=MagicMock(return_value=session))
        client.service("s3")
        session.client.assert_called_once_with("s3", region_name="us-east-1", config=CLIENT_CONFIG)


class TestAWSClientInit:
    def test_explicit_values(self):
        client = AWSClient(profile="default", region="eu-west-1")
        assert client.profile() == "default"
        assert client.region() == "eu-west-1"

    def test_region_from_environment(self):
        """conftest의 AWS_DEFAULT_REGION 사용"""
        client = AWSClient()
        assert client.profile() == "default"
        assert client.region() == "ap-northeast-2"

    def test_region_from_profile(self, aws_profiles):
        client = AWSClient(profile="dev")
        assert client.region() == "us-west-2"

    def test_missing_profile(self):
        with pytest.raises(ClientConfigError) as exc_info:
            AWSClient(profile="does-not-exist")
        assert exc_info.value.profile == "does-not-exist"

    def test_invalid_region(self):
        with pytest.raises(ClientConfigError) as exc_info:
            AWSClient(region="not a region")
        assert str(exc_info.value) == "Invalid region name: 'not a region'"

    def test_missing_profile_message(self):
        with pytest.raises(ClientConfigError) as exc_info:
            AWSClient(profile="ghost")
        assert str(exc_info.value) == "Profile not found: ghost"

    def test_default_profile_uses_credential_chain(self):
        """'default'는 profile_name=None으로 세션 생성"""
        factory = MagicMock(return_value=MagicMock(region_name="us-east-1"))
        AWSClient(profile="default", session_factory=factory)
        factory.assert_called_once_with(profile_name=None, region_name=None)


class TestAWSClientService:
    @mock_aws
    def test_service_is_cached(self):
        client = AWSClient(region="ap-northeast-2")
        assert client.service("ec2") is client.service("ec2")
        assert client.service("ec2").meta.region_name == "ap-northeast-2"

    @mock_aws
    def test_reconfigure_region(self):
        client = AWSClient(region="ap-northeast-2")
        old = client.service("ec2")

        client.reconfigure(region="eu-west-1")

        assert client.region() == "eu-west-1"
        new = client.service("ec2")
        assert new is not old
        assert new.meta.region_name == "eu-west-1"

    def test_reconfigure_profile(self, aws_profiles):
        client = AWSClient(region="ap-northeast-2")
        client.reconfigure(profile="prod")
        assert client.profile() == "prod"
        # 명시하지 않은 리전은 유지
        assert client.region() == "ap-northeast-2"

    def test_failed_reconfigure_keeps_previous(self):
        """실패 시 이전 구성 유지"""
        client = AWSClient(region="ap-northeast-2")
        old = client.service("sqs")

        with pytest.raises(ClientConfigError):
            client.reconfigure(profile="does-not-exist")
        with pytest.raises(ClientConfigError):
            client.reconfigure(region="bogus")

        assert client.profile() == "default"
        assert client.region() == "ap-northeast-2"
        assert client.service("sqs") is old

    def test_repr(self):
        client = AWSClient(region="us-east-1")
        assert repr(client) == "AWSClient(profile='default', region='us-east-1')"
