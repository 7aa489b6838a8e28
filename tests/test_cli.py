"""
CLI Tests
Exit codes and console output of the deployment entry point
"""

import pytest
from unittest.mock import patch

from deployer import cli

from conftest import build_provider, never_confirms, SIGNER_ADDRESS, DEPLOYED_ADDRESS, ONE_UNIT


ENV_VARS = [
    'DEPLOY_RPC_URL', 'ALCHEMY_RPC_URL', 'DEPLOYER_PRIVATE_KEY', 'CONTRACT_NAME',
    'ARTIFACTS_DIR', 'CONFIRMATION_TIMEOUT', 'POLL_INTERVAL', 'CHAIN_ID', 'LOG_LEVEL',
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """No ambient configuration leaks into the tests"""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv('DEPLOY_CONFIG_PATH', str(tmp_path / 'missing.json'))
    monkeypatch.setattr('deployer.config.load_dotenv', lambda *args, **kwargs: False)


def run_main(provider):
    with patch('deployer.cli.Web3DeploymentProvider', return_value=provider) as provider_cls:
        code = cli.main()
    return code, provider_cls


def test_success_exits_zero(capsys):
    code, _ = run_main(build_provider())

    assert code == 0
    assert capsys.readouterr().out.splitlines() == [
        f"Deploying contract with account: {SIGNER_ADDRESS}",
        f"Account balance: {ONE_UNIT}",
        f"RealEstateTokenization deployed at: {DEPLOYED_ADDRESS}",
    ]


def test_no_signer_exits_one(capsys):
    code, _ = run_main(build_provider(signers=[]))

    assert code == 1
    assert "No signer available" in capsys.readouterr().err


def test_provider_built_from_config(monkeypatch):
    monkeypatch.setenv('DEPLOY_RPC_URL', 'http://node.internal:8545')
    monkeypatch.setenv('CONTRACT_NAME', 'PropertyRegistry')

    code, provider_cls = run_main(build_provider())

    assert code == 0
    config = provider_cls.call_args.args[0]
    assert config.rpc_url == 'http://node.internal:8545'
    assert config.contract_name == 'PropertyRegistry'


def test_configured_timeout_applies(monkeypatch):
    monkeypatch.setenv('CONFIRMATION_TIMEOUT', '0.05')

    code, _ = run_main(build_provider(confirmation=never_confirms))

    assert code == 1


def test_invalid_config_exits_one(monkeypatch, capsys):
    monkeypatch.setenv('CONFIRMATION_TIMEOUT', 'soon')

    code, provider_cls = run_main(build_provider())

    assert code == 1
    provider_cls.assert_not_called()
    assert "Invalid deployment configuration" in capsys.readouterr().err


def test_unknown_log_level_falls_back_to_info(monkeypatch, capsys):
    monkeypatch.setenv('LOG_LEVEL', 'verbose')

    code, _ = run_main(build_provider())

    assert code == 0
    assert "Unknown LOG_LEVEL 'VERBOSE'" in capsys.readouterr().err
