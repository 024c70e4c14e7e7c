"""Periodic removal of expired URL mappings

Expired mappings already behave as gone for resolution. The sweeper only
reclaims their storage. It runs either inside a long-lived process (a daemon
thread owned by `SweepScheduler`) or once per invocation from a scheduled
Lambda (see `urlmapper.lambdas.sweep_expired`).

Classes:
    ExpirySweeper:
        Delete every mapping whose expiry is strictly before now.
    SweepSchedule:
        Daily "HH:MM" UTC schedule, or a fixed interval in seconds.
    SweepScheduler:
        Background thread running the sweeper according to a schedule.

Functions:
    main(argv: list[str] | None = None) -> int
        Console entry point (`urlmapper-sweeper`).

Example:
    >>> from urlmapper.dao.memory import MappingMemoryDAO
    >>> sweeper = ExpirySweeper(MappingMemoryDAO())
    >>> sweeper.sweep()
    0
"""

import argparse
import logging
import threading
from dataclasses import dataclass
from datetime import datetime, time, timedelta

from urlmapper.types import Clock
from urlmapper.dao import create_mapping_dao
from urlmapper.dao.base import MappingBaseDAO
from urlmapper.utils import MapperConfig, utcnow, load_config, initialize_logging


logger = logging.getLogger(__name__)

# Event codes
SWEEP_STARTED = 'SWEEP_STARTED'
SWEEP_COMPLETED = 'SWEEP_COMPLETED'
SWEEP_FAILED = 'SWEEP_FAILED'


class ExpirySweeper:
    def __init__(self, dao: MappingBaseDAO, clock: Clock = utcnow):
        self.dao = dao
        self.clock = clock

    def sweep(self) -> int:
        """Delete all mappings that expired before now.

        Returns:
            int: number of deleted mappings.

        Raises:
            DataStoreError: If the data store fails. Nothing is retried here.
        """
        now = self.clock()
        logger.info('Sweeping mappings expired before %s.', now.isoformat(), extra={'event': SWEEP_STARTED})

        deleted = self.dao.delete_expired_before(now)

        logger.info('Deleted %s expired mappings.', deleted, extra={'event': SWEEP_COMPLETED, 'deleted': deleted})
        return deleted


@dataclass(frozen=True)
class SweepSchedule:
    """When to sweep.

    Attributes:
        at (time):
            Daily UTC time of the sweep. Ignored when `interval_seconds` is set.
        interval_seconds (int | None):
            Fixed number of seconds between sweeps.
    """

    at: time = time(3, 0)
    interval_seconds: int | None = None

    @classmethod
    def from_config(cls, config: MapperConfig) -> 'SweepSchedule':
        return cls(at=config.sweep_time, interval_seconds=config.sweep_interval_seconds)

    def next_run(self, after: datetime) -> datetime:
        """Return the first scheduled moment strictly after `after`.

        Example:
            >>> from datetime import UTC
            >>> SweepSchedule(at=time(3, 0)).next_run(datetime(2025, 1, 1, 3, 0, tzinfo=UTC))
            datetime.datetime(2025, 1, 2, 3, 0, tzinfo=datetime.timezone.utc)
        """
        if self.interval_seconds is not None:
            return after + timedelta(seconds=self.interval_seconds)

        candidate = after.replace(hour=self.at.hour, minute=self.at.minute, second=0, microsecond=0)
        if candidate <= after:
            candidate += timedelta(days=1)
        return candidate


class SweepScheduler:
    """Run an ExpirySweeper on a background daemon thread.

    A failed sweep is logged and retried at the next scheduled moment. It
    never stops the scheduler.

    Example:
        >>> scheduler = SweepScheduler(sweeper, SweepSchedule(interval_seconds=60))
        >>> scheduler.start()
        >>> ...
        >>> scheduler.stop()
    """

    def __init__(self, sweeper: ExpirySweeper, schedule: SweepSchedule, clock: Clock = utcnow):
        self.sweeper = sweeper
        self.schedule = schedule
        self.clock = clock
        self._stopped = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def tick(self) -> int | None:
        """Run a single sweep. Returns the deleted count, None if the sweep failed.

        Any exception is logged and swallowed. The background thread must
        outlive a failed sweep.
        """
        try:
            return self.sweeper.sweep()
        except Exception as error:
            logger.exception(
                'Sweep failed. Retrying at the next scheduled run.',
                extra={'event': SWEEP_FAILED, 'error': error.__class__.__name__},
            )
            return None

    def run_forever(self) -> None:
        while not self._stopped.is_set():
            now = self.clock()
            next_run = self.schedule.next_run(now)
            logger.debug('Next sweep scheduled at %s.', next_run.isoformat())

            if self._stopped.wait(timeout=max((next_run - now).total_seconds(), 0)):
                break
            self.tick()

    def start(self) -> None:
        if self.running:
            return
        self._stopped.clear()
        self._thread = threading.Thread(target=self.run_forever, name='urlmapper-sweeper', daemon=True)
        self._thread.start()

    def stop(self, timeout: float | None = None) -> None:
        self._stopped.set()
        if self._thread is not None:
            self._thread.join(timeout=timeout)
            self._thread = None


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog='urlmapper-sweeper', description='Delete expired URL mappings.')
    parser.add_argument('--once', action='store_true', help='run a single sweep and exit')
    args = parser.parse_args(argv)

    initialize_logging()
    config = load_config()
    scheduler = SweepScheduler(ExpirySweeper(create_mapping_dao(config)), SweepSchedule.from_config(config))

    if args.once:
        return 0 if scheduler.tick() is not None else 1

    try:
        scheduler.run_forever()
    except KeyboardInterrupt:
        logger.info('Sweeper interrupted. Shutting down.')
    return 0


if __name__ == '__main__':  # pragma: no cover
    raise SystemExit(main())
