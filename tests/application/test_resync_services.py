"""Tests for ResyncServices use case."""

import pytest
from hostsync.application.use_cases.resync_services import ResyncServices
from hostsync.domain.value_objects.key_value_record import KeyValueRecord

RECORDS = (
    KeyValueRecord("mainsail", "general.printername", "Shaper Compact"),
    KeyValueRecord("mainsail", "uiSettings.primary", "#D41216"),
)


class TestResyncServices:
    @pytest.mark.asyncio
    async def test_restarts_in_order_and_pushes_records(self, supervisor, key_value, sleep):
        resync = ResyncServices(
            supervisor, key_value, ["klipper", "moonraker"], sleep=sleep
        )

        result = await resync.execute(RECORDS)

        assert supervisor.restarted == ["klipper", "moonraker"]
        assert result.service_ready
        assert result.records_pushed == 2
        assert key_value.items[0] == ("mainsail", "general.printername", "Shaper Compact")

    @pytest.mark.asyncio
    async def test_failed_restart_does_not_stop_others(self, supervisor, key_value, sleep):
        supervisor.failing = {"crowsnest"}
        resync = ResyncServices(
            supervisor, key_value, ["crowsnest", "nginx"], sleep=sleep
        )

        result = await resync.execute()

        assert result.failed == ["crowsnest"]
        assert result.restarted == ["nginx"]

    @pytest.mark.asyncio
    async def test_waits_for_readiness(self, supervisor, key_value):
        key_value.ready_after = 3
        slept = []

        async def fake_sleep(seconds):
            slept.append(seconds)

        resync = ResyncServices(
            supervisor, key_value, [], readiness_attempts=5,
            readiness_interval=0.5, sleep=fake_sleep,
        )
        result = await resync.execute(RECORDS)

        assert result.service_ready
        assert key_value.probes == 3
        assert slept == [0.5, 0.5]

    @pytest.mark.asyncio
    async def test_gives_up_after_fixed_attempts(self, supervisor, key_value):
        key_value.reachable = False
        slept = []

        async def fake_sleep(seconds):
            slept.append(seconds)

        resync = ResyncServices(
            supervisor, key_value, ["klipper"], readiness_attempts=4, sleep=fake_sleep
        )
        result = await resync.execute(RECORDS)

        assert not result.service_ready
        assert result.records_pushed == 0
        assert key_value.probes == 4
        assert len(slept) == 3

    @pytest.mark.asyncio
    async def test_no_records_skips_probe(self, supervisor, key_value, sleep):
        result = await ResyncServices(supervisor, key_value, ["klipper"], sleep=sleep).execute()
        assert key_value.probes == 0
        assert not result.service_ready

    def test_attempts_must_be_positive(self, supervisor, key_value):
        with pytest.raises(ValueError):
            ResyncServices(supervisor, key_value, [], readiness_attempts=0)
