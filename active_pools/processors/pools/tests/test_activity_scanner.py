"""Tests for the swap activity scanner."""
import pytest

from active_pools.processors import ActivityScanner, ScanError, iter_block_windows


class TestIterBlockWindows:

    def test_windows_cover_range(self):
        assert list(iter_block_windows(0, 10, 4)) == [(0, 4), (5, 9), (10, 10)]

    def test_single_block(self):
        assert list(iter_block_windows(7, 7, 100)) == [(7, 7)]

    def test_empty_when_start_after_end(self):
        assert list(iter_block_windows(11, 10, 4)) == []

    @pytest.mark.parametrize("start,end,size", [(0, 100, 1), (3, 97, 7), (50, 1000, 2000), (0, 0, 1)])
    def test_contiguous_and_non_overlapping(self, start, end, size):
        windows = list(iter_block_windows(start, end, size))

        assert windows[0][0] == start
        assert windows[-1][1] == end
        for (_, prev_to), (next_from, _) in zip(windows, windows[1:]):
            assert next_from == prev_to + 1
        assert all(lo <= hi for lo, hi in windows)

    def test_invalid_window_size(self):
        with pytest.raises(ValueError):
            list(iter_block_windows(0, 10, 0))


class TestActivityScanner:

    @pytest.fixture
    def pools(self, addr):
        return {addr(1), addr(2), addr(3)}

    @pytest.mark.asyncio
    async def test_start_after_end_issues_no_queries(self, fake_client, pools, swap_topic):
        scanner = ActivityScanner(fake_client, window_size=10)

        assert await scanner.scan(pools, 101, 100, swap_topic) == set()
        assert fake_client.log_queries == []

    @pytest.mark.asyncio
    async def test_one_active_pool_of_three(self, fake_client, pools, addr, swap_topic, other_topic):
        fake_client.add_log(addr(2), 50)
        fake_client.add_log(addr(3), 50, topic0=other_topic)
        fake_client.add_log(addr(99), 60)

        active = await ActivityScanner(fake_client, window_size=10).scan(pools, 0, 100, swap_topic)

        assert active == {addr(2)}

    @pytest.mark.asyncio
    async def test_queries_by_topic_in_windows(self, fake_client, pools, swap_topic):
        await ActivityScanner(fake_client, window_size=40).scan(pools, 10, 100, swap_topic)

        assert fake_client.log_queries == [
            (10, 50, (swap_topic,)),
            (51, 91, (swap_topic,)),
            (92, 100, (swap_topic,)),
        ]

    @pytest.mark.asyncio
    async def test_range_endpoints_inclusive(self, fake_client, pools, addr, swap_topic):
        fake_client.add_log(addr(1), 10)
        fake_client.add_log(addr(2), 100)
        fake_client.add_log(addr(3), 101)

        active = await ActivityScanner(fake_client, window_size=3).scan(pools, 10, 100, swap_topic)

        assert active == {addr(1), addr(2)}

    @pytest.mark.asyncio
    @pytest.mark.parametrize("window_size", [2, 5, 17, 1000])
    async def test_window_size_does_not_change_result(self, fake_client, addr, swap_topic, window_size):
        pools = {addr(n) for n in range(1, 11)}
        for n, block in [(1, 0), (3, 13), (3, 14), (5, 29), (7, 30), (9, 61), (10, 62)]:
            fake_client.add_log(addr(n), block)

        baseline = await ActivityScanner(fake_client, window_size=1).scan(pools, 0, 61, swap_topic)
        result = await ActivityScanner(fake_client, window_size=window_size).scan(pools, 0, 61, swap_topic)

        assert baseline == {addr(1), addr(3), addr(5), addr(7), addr(9)}
        assert result == baseline

    @pytest.mark.asyncio
    async def test_lowercase_pool_addresses_match(self, fake_client, addr, swap_topic):
        fake_client.add_log(addr(1), 5)

        active = await ActivityScanner(fake_client).scan({addr(1).lower()}, 0, 10, swap_topic)

        assert active == {addr(1)}

    @pytest.mark.asyncio
    async def test_query_failure_aborts_scan(self, fake_client, pools, swap_topic):
        fake_client.log_error = ConnectionError("node unavailable")

        with pytest.raises(ScanError, match="0-10"):
            await ActivityScanner(fake_client, window_size=10).scan(pools, 0, 100, swap_topic)
        assert len(fake_client.log_queries) == 1

    def test_invalid_window_size(self, fake_client):
        with pytest.raises(ValueError):
            ActivityScanner(fake_client, window_size=0)
