import logging
import random
import time
from datetime import date, timedelta

import requests
from celery import shared_task
from django.conf import settings
from django.utils import timezone

logger = logging.getLogger(__name__)

SOURCE_EXTERNAL = 'external-api'
SOURCE_MOCK = 'cron-job-mock'

MOCK_CAMPAIGN_IDS = ('campaign-1', 'campaign-2', 'campaign-3')
MOCK_DEVICE_IDS = ('device-1', 'device-2', 'device-3')

# Fixed sample set used by the insert_mock_playbacks command
SAMPLE_PLAYBACKS = [
    {'campaign_id': 'CAMPAIGN_ID_1', 'device_id': 'DEVICE_ID_1', 'date': '2024-06-15', 'time': '10:00:00', 'duration': 30},
    {'campaign_id': 'CAMPAIGN_ID_1', 'device_id': 'DEVICE_ID_2', 'date': '2024-06-15', 'time': '10:30:00', 'duration': 30},
    {'campaign_id': 'CAMPAIGN_ID_2', 'device_id': 'DEVICE_ID_3', 'date': '2024-06-15', 'time': '14:00:00', 'duration': 45},
    {'campaign_id': 'CAMPAIGN_ID_2', 'device_id': 'DEVICE_ID_1', 'date': '2024-06-15', 'time': '15:00:00', 'duration': 45},
    {'campaign_id': 'CAMPAIGN_ID_3', 'device_id': 'DEVICE_ID_2', 'date': '2024-06-16', 'time': '09:00:00', 'duration': 60},
]

RANDOM_DURATIONS = (15, 30, 45, 60, 90)


class ExternalFeedError(Exception):
    pass


def fetch_external_playbacks(url=None, api_key=None):
    """Read the external playback feed; raises ``ExternalFeedError`` on any failure."""
    url = url or settings.EXTERNAL_API_URL
    api_key = api_key or settings.EXTERNAL_API_KEY
    try:
        response = requests.get(
            url,
            headers={
                'Authorization': f'Bearer {api_key}',
                'Content-Type': 'application/json',
            },
            timeout=settings.INGESTION_REQUEST_TIMEOUT,
        )
        response.raise_for_status()
        payload = response.json()
    except (requests.RequestException, ValueError) as e:
        raise ExternalFeedError(str(e)) from e

    playbacks = payload.get('playbacks') if isinstance(payload, dict) else None
    return list(playbacks or [])


def generate_mock_playbacks(count=10, now=None, campaign_ids=MOCK_CAMPAIGN_IDS, device_ids=MOCK_DEVICE_IDS, rng=random):
    """Synthetic playbacks spread over the 24 hours before ``now``."""
    now = now or timezone.now()
    window_start = now - timedelta(days=1)
    playbacks = []
    for _ in range(count):
        moment = window_start + timedelta(seconds=rng.uniform(0, 24 * 60 * 60))
        playbacks.append({
            'campaign_id': rng.choice(campaign_ids),
            'device_id': rng.choice(device_ids),
            'date': moment.date().isoformat(),
            'time': f"{rng.randrange(24):02d}:{rng.randrange(60):02d}:00",
            'duration': rng.randint(15, 75),
            'source': SOURCE_MOCK,
        })
    return playbacks


def generate_random_playbacks(count=10, start=date(2024, 6, 1), campaign_ids=None, device_ids=None, rng=random):
    """Random playbacks within the 30 days from ``start``."""
    campaign_ids = campaign_ids or ('CAMPAIGN_ID_1', 'CAMPAIGN_ID_2', 'CAMPAIGN_ID_3')
    device_ids = device_ids or ('DEVICE_ID_1', 'DEVICE_ID_2', 'DEVICE_ID_3')
    return [{
        'campaign_id': rng.choice(campaign_ids),
        'device_id': rng.choice(device_ids),
        'date': (start + timedelta(days=rng.randrange(30))).isoformat(),
        'time': f"{rng.randrange(24):02d}:{rng.randrange(60):02d}:00",
        'duration': rng.choice(RANDOM_DURATIONS),
    } for _ in range(count)]


def submit_playbacks(playbacks, endpoint_url=None, service_key=None, pacing=None, sleep=time.sleep):
    """POST each playback to the insertion endpoint, one at a time.

    Failures are logged per record and never stop the batch. Returns
    ``(inserted, failed)``.
    """
    endpoint_url = endpoint_url or settings.INGESTION_ENDPOINT_URL
    service_key = service_key or settings.INGESTION_SERVICE_KEY
    pacing = settings.INGESTION_PACING_SECONDS if pacing is None else pacing
    headers = {
        'Authorization': f'Bearer {service_key}',
        'apikey': service_key,
        'Content-Type': 'application/json',
    }

    inserted = failed = 0
    for index, playback in enumerate(playbacks):
        if index and pacing:
            sleep(pacing)
        try:
            response = requests.post(
                endpoint_url,
                json=playback,
                headers=headers,
                timeout=settings.INGESTION_REQUEST_TIMEOUT,
            )
        except requests.RequestException as e:
            failed += 1
            logger.error(f"Network error submitting playback {playback.get('date')} {playback.get('time')}: {e}")
            continue

        if response.ok:
            inserted += 1
            logger.info(f"Playback inserted: {playback.get('date')} {playback.get('time')} - {playback.get('duration')}s")
        else:
            failed += 1
            logger.error(f"Error inserting playback ({response.status_code}): {response.text[:200]}")

    return inserted, failed


@shared_task
def ingest_playbacks():
    """Nightly ingestion: external feed, or synthetic playbacks when it is unavailable"""
    started = time.monotonic()
    source = SOURCE_EXTERNAL
    try:
        playbacks = fetch_external_playbacks()
    except ExternalFeedError as e:
        logger.warning(f"External playback feed unavailable, using mock data: {e}")
        playbacks = generate_mock_playbacks()
        source = SOURCE_MOCK

    if not playbacks:
        logger.info("No new playback data to process")
        return {'fetched': 0, 'inserted': 0, 'failed': 0, 'source': source}

    logger.info(f"Processing {len(playbacks)} playback records from {source}")
    inserted, failed = submit_playbacks(playbacks)

    elapsed_ms = int((time.monotonic() - started) * 1000)
    logger.info(f"Playback ingestion finished in {elapsed_ms}ms: {inserted} inserted, {failed} failed")
    return {'fetched': len(playbacks), 'inserted': inserted, 'failed': failed, 'source': source}
