import random
from datetime import datetime, timedelta, timezone as dt_timezone
from unittest.mock import MagicMock, call, patch

import requests
from django.test import SimpleTestCase, override_settings

from tasks import ingestion


def feed_response(playbacks):
    response = MagicMock()
    response.raise_for_status.return_value = None
    response.json.return_value = {'playbacks': playbacks}
    return response


def post_response(ok=True, status_code=200, text='{}'):
    response = MagicMock(ok=ok, status_code=status_code, text=text)
    return response


PLAYBACK = {'campaign_id': 'c1', 'device_id': 'd1', 'date': '2024-06-15', 'time': '10:00:00', 'duration': 30}


class FetchExternalPlaybacksTest(SimpleTestCase):
    @patch('tasks.ingestion.requests.get')
    def test_reads_playbacks_with_bearer_key(self, mock_get):
        mock_get.return_value = feed_response([PLAYBACK])

        self.assertEqual(ingestion.fetch_external_playbacks(), [PLAYBACK])
        args, kwargs = mock_get.call_args
        self.assertEqual(args[0], 'http://feed.test/playbacks')
        self.assertEqual(kwargs['headers']['Authorization'], 'Bearer test-feed-key')

    @patch('tasks.ingestion.requests.get')
    def test_http_error_raises_feed_error(self, mock_get):
        response = MagicMock()
        response.raise_for_status.side_effect = requests.HTTPError('503 Server Error')
        mock_get.return_value = response

        with self.assertRaises(ingestion.ExternalFeedError):
            ingestion.fetch_external_playbacks()

    @patch('tasks.ingestion.requests.get', side_effect=requests.ConnectionError('refused'))
    def test_connection_error_raises_feed_error(self, _):
        with self.assertRaises(ingestion.ExternalFeedError):
            ingestion.fetch_external_playbacks()

    @patch('tasks.ingestion.requests.get')
    def test_missing_playbacks_key(self, mock_get):
        response = feed_response([])
        response.json.return_value = {}
        mock_get.return_value = response
        self.assertEqual(ingestion.fetch_external_playbacks(), [])


class GenerateMockPlaybacksTest(SimpleTestCase):
    def test_events_within_last_day(self):
        now = datetime(2024, 6, 15, 12, 0, tzinfo=dt_timezone.utc)
        playbacks = ingestion.generate_mock_playbacks(now=now, rng=random.Random(7))

        self.assertEqual(len(playbacks), 10)
        allowed_dates = {(now - timedelta(days=1)).date().isoformat(), now.date().isoformat()}
        for playback in playbacks:
            self.assertIn(playback['date'], allowed_dates)
            self.assertTrue(15 <= playback['duration'] <= 75)
            self.assertIn(playback['campaign_id'], ingestion.MOCK_CAMPAIGN_IDS)
            self.assertEqual(playback['source'], ingestion.SOURCE_MOCK)

    def test_random_playbacks_in_june(self):
        playbacks = ingestion.generate_random_playbacks(25, rng=random.Random(3))
        self.assertEqual(len(playbacks), 25)
        for playback in playbacks:
            self.assertTrue('2024-06-01' <= playback['date'] <= '2024-06-30')
            self.assertIn(playback['duration'], ingestion.RANDOM_DURATIONS)


class SubmitPlaybacksTest(SimpleTestCase):
    @patch('tasks.ingestion.requests.post')
    def test_sends_service_key_headers(self, mock_post):
        mock_post.return_value = post_response()

        self.assertEqual(ingestion.submit_playbacks([PLAYBACK]), (1, 0))
        args, kwargs = mock_post.call_args
        self.assertEqual(args[0], 'http://testserver/functions/v1/insert-playback/')
        self.assertEqual(kwargs['json'], PLAYBACK)
        self.assertEqual(kwargs['headers']['Authorization'], 'Bearer test-service-key')
        self.assertEqual(kwargs['headers']['apikey'], 'test-service-key')

    @patch('tasks.ingestion.requests.post')
    def test_failures_do_not_stop_batch(self, mock_post):
        mock_post.side_effect = [
            post_response(),
            requests.ConnectionError('reset'),
            post_response(ok=False, status_code=400, text='{"error": "Missing required fields: duration"}'),
            post_response(),
        ]

        with self.assertLogs('tasks.ingestion', level='ERROR') as logs:
            inserted, failed = ingestion.submit_playbacks([PLAYBACK] * 4)

        self.assertEqual((inserted, failed), (2, 2))
        self.assertEqual(mock_post.call_count, 4)
        self.assertEqual(len(logs.records), 2)

    @patch('tasks.ingestion.requests.post')
    def test_pacing_between_submissions(self, mock_post):
        mock_post.return_value = post_response()
        sleep = MagicMock()

        ingestion.submit_playbacks([PLAYBACK] * 3, pacing=0.1, sleep=sleep)
        self.assertEqual(sleep.call_args_list, [call(0.1), call(0.1)])

    @patch('tasks.ingestion.requests.post')
    def test_no_retries(self, mock_post):
        mock_post.return_value = post_response(ok=False, status_code=500)
        self.assertEqual(ingestion.submit_playbacks([PLAYBACK]), (0, 1))
        self.assertEqual(mock_post.call_count, 1)


class IngestPlaybacksTaskTest(SimpleTestCase):
    @patch('tasks.ingestion.submit_playbacks', return_value=(1, 0))
    @patch('tasks.ingestion.fetch_external_playbacks', return_value=[PLAYBACK])
    def test_external_feed(self, _, mock_submit):
        result = ingestion.ingest_playbacks.delay().get()
        self.assertEqual(result, {'fetched': 1, 'inserted': 1, 'failed': 0, 'source': 'external-api'})
        mock_submit.assert_called_once_with([PLAYBACK])

    @patch('tasks.ingestion.submit_playbacks', return_value=(9, 1))
    @patch('tasks.ingestion.fetch_external_playbacks', side_effect=ingestion.ExternalFeedError('timeout'))
    def test_falls_back_to_mock_data(self, _, mock_submit):
        with self.assertLogs('tasks.ingestion', level='WARNING'):
            result = ingestion.ingest_playbacks()

        self.assertEqual(result, {'fetched': 10, 'inserted': 9, 'failed': 1, 'source': 'cron-job-mock'})
        submitted = mock_submit.call_args[0][0]
        self.assertEqual(len(submitted), 10)

    @patch('tasks.ingestion.submit_playbacks')
    @patch('tasks.ingestion.fetch_external_playbacks', return_value=[])
    def test_empty_feed(self, _, mock_submit):
        result = ingestion.ingest_playbacks()
        self.assertEqual(result['fetched'], 0)
        mock_submit.assert_not_called()

    @override_settings(INGESTION_ENDPOINT_URL='http://backend.test/functions/v1/insert-playback/')
    @patch('tasks.ingestion.requests.post')
    @patch('tasks.ingestion.requests.get', side_effect=requests.Timeout('slow'))
    def test_end_to_end_with_fallback(self, _, mock_post):
        mock_post.return_value = post_response()
        result = ingestion.ingest_playbacks()

        self.assertEqual(result['inserted'], 10)
        self.assertEqual(mock_post.call_args[0][0], 'http://backend.test/functions/v1/insert-playback/')
