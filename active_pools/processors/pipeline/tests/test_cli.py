"""Tests for the pipeline command-line interface."""
import logging

import pytest
from unittest.mock import AsyncMock, Mock, patch

from active_pools.config import ConfigError
from active_pools.processors import PoolDataError
from active_pools.processors.pipeline import cli

SUCCESS = {
    "success": True,
    "processed_count": 2,
    "output_path": "output/pools_data_1_2.json",
    "metadata": {"start_block": 1, "end_block": 2, "strange_reserves": 1, "skipped_pools": []},
}


@pytest.fixture
def mock_pipeline():
    """Patch the pipeline class used by the CLI."""
    pipeline = Mock()
    pipeline.run = AsyncMock(return_value=SUCCESS)
    with patch.object(cli, "ActivePoolsPipeline", return_value=pipeline) as pipeline_class, \
            patch.object(cli, "get_config", return_value=Mock()):
        yield pipeline_class, pipeline


class TestCli:

    @pytest.mark.asyncio
    async def test_success(self, mock_pipeline):
        pipeline_class, pipeline = mock_pipeline

        code = await cli.main([
            "--start-block", "1",
            "--end-block", "2",
            "--output", "out.json",
            "--log-bulk-size", "50",
            "--max-concurrency", "4",
            "--skip-failed-pools",
        ])

        assert code == 0
        kwargs = pipeline_class.call_args.kwargs
        assert kwargs["window_size"] == 50
        assert kwargs["max_concurrency"] == 4
        assert kwargs["skip_failed_pools"] is True
        pipeline.run.assert_awaited_once_with(
            start_block=1, end_block=2, pools_file=None, output_path="out.json", save_pools_file=None
        )

    @pytest.mark.asyncio
    async def test_defaults_defer_to_config(self, mock_pipeline):
        pipeline_class, pipeline = mock_pipeline

        assert await cli.main([]) == 0

        kwargs = pipeline_class.call_args.kwargs
        assert kwargs["window_size"] is None
        assert kwargs["max_concurrency"] is None
        assert kwargs["skip_failed_pools"] is None

    @pytest.mark.asyncio
    async def test_pipeline_error_exit_code(self, mock_pipeline):
        _, pipeline = mock_pipeline
        pipeline.run.side_effect = PoolDataError("boom", "0x0000000000000000000000000000000000000001")

        assert await cli.main([]) == 1

    @pytest.mark.asyncio
    async def test_config_error_exit_code(self, mock_pipeline):
        pipeline_class, _ = mock_pipeline
        pipeline_class.side_effect = ConfigError("bad config")

        assert await cli.main([]) == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize("argv", [
        ["--log-bulk-size", "0"],
        ["--max-concurrency", "0"],
        ["--start-block", "-1"],
        ["--pools-file", "a.txt", "--save-pools-file", "b.txt"],
    ])
    async def test_invalid_arguments(self, mock_pipeline, argv):
        with pytest.raises(SystemExit) as exc_info:
            await cli.main(argv)
        assert exc_info.value.code == 2

    def test_format_result_reports_skipped_and_strange(self, caplog):
        result = dict(SUCCESS, metadata=dict(SUCCESS["metadata"], skipped_pools=["0xabc"]))

        with caplog.at_level(logging.INFO):
            cli.format_pipeline_result(result)

        assert "Processed 2 pools" in caplog.text
        assert "1 pools with strange reserves" in caplog.text
        assert "Skipped 1 pools: 0xabc" in caplog.text

    def test_interrupt_exit_code(self):
        with patch.object(cli, "main", Mock(return_value=None)), \
                patch.object(cli.asyncio, "run", side_effect=KeyboardInterrupt):
            with pytest.raises(SystemExit) as exc_info:
                cli.run()
        assert exc_info.value.code == 130

    def test_run_exit_code(self):
        with patch.object(cli, "main", Mock(return_value=None)), \
                patch.object(cli.asyncio, "run", return_value=0):
            with pytest.raises(SystemExit) as exc_info:
                cli.run()
        assert exc_info.value.code == 0
