#!/usr/bin/env python3
import sys
import os
import unittest
from unittest.mock import Mock
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import requests

from app.errors import DispatchError
from app.services import Deadline, build_webhook_url, send_discord_payload


class FakeClock:
    def __init__(self, now=100.0):
        self.now = now

    def __call__(self):
        return self.now


class TestBuildWebhookUrl(unittest.TestCase):
    def test_default_base(self):
        self.assertEqual(
            build_webhook_url('123', 'abc-DEF_456'),
            'https://discordapp.com/api/webhooks/123/abc-DEF_456',
        )

    def test_identifiers_are_not_reencoded(self):
        url = build_webhook_url('1', 'tok%2Fen', 'http://localhost:9999/api/webhooks/')
        self.assertEqual(url, 'http://localhost:9999/api/webhooks/1/tok%2Fen')


class TestDeadline(unittest.TestCase):
    def test_remaining_counts_down(self):
        clock = FakeClock()
        deadline = Deadline.after(60, clock=clock)
        self.assertEqual(deadline.remaining(), 60)
        clock.now += 45
        self.assertEqual(deadline.remaining(), 15)
        self.assertFalse(deadline.expired)
        clock.now += 30
        self.assertEqual(deadline.remaining(), 0)
        self.assertTrue(deadline.expired)


class TestSendDiscordPayload(unittest.TestCase):
    def test_posts_json_with_remaining_timeout(self):
        clock = FakeClock()
        deadline = Deadline.after(10, clock=clock)
        clock.now += 4
        session = Mock()
        session.post.return_value = Mock(status_code=204)

        resp = send_discord_payload('http://discord/1/t', b'{}', deadline=deadline, session=session)

        self.assertEqual(resp.status_code, 204)
        session.post.assert_called_once_with(
            'http://discord/1/t',
            data=b'{}',
            headers={'Content-Type': 'application/json'},
            timeout=6,
        )

    def test_non_2xx_is_not_an_error(self):
        session = Mock()
        session.post.return_value = Mock(status_code=429)
        resp = send_discord_payload('http://discord/1/t', b'{}', session=session)
        self.assertEqual(resp.status_code, 429)

    def test_transport_errors_become_dispatch_error(self):
        for exc in [requests.ConnectionError('refused'), requests.Timeout('slow'), requests.exceptions.InvalidURL('bad')]:
            session = Mock()
            session.post.side_effect = exc
            with self.assertRaises(DispatchError):
                send_discord_payload('http://discord/1/t', b'{}', session=session)

    def test_expired_deadline_skips_call(self):
        clock = FakeClock()
        deadline = Deadline.after(1, clock=clock)
        clock.now += 2
        session = Mock()
        with self.assertRaises(DispatchError):
            send_discord_payload('http://discord/1/t', b'{}', deadline=deadline, session=session)
        session.post.assert_not_called()


if __name__ == '__main__':
    unittest.main()
