#!/usr/bin/env python3
"""
Unit tests for MessageChannel.

Tests framing of outbound events, failure reporting and inbound filtering.
"""

import json
import unittest
from unittest.mock import Mock

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

from remote_control.common.constants import (
    PROTOCOL_NAME, ENDPOINT_TEXT_MESSAGE_NAME, ControlEventTypes, DIRECT_EVENT_TYPES
)
from remote_control.common.protocol_definitions import (
    create_pointer_event, create_start_event, create_grant_event
)
from remote_control.control.message_channel import MessageChannel
from fake_host import FakeHost


class TestMessageChannelSend(unittest.TestCase):
    """Test cases for outbound frames."""
    
    def setUp(self):
        self.host = FakeHost()
        self.channel = MessageChannel(self.host)
    
    def test_send_wraps_frame_in_endpoint_text_message(self):
        self.assertTrue(self.channel.send("P1", create_pointer_event(ControlEventTypes.POINTER_MOVE, 0.5, 0.5)))
        
        target, payload = self.host.sent[0]
        self.assertEqual(target, "P1")
        self.assertEqual(payload["name"], ENDPOINT_TEXT_MESSAGE_NAME)
        self.assertEqual(json.loads(payload["text"]), {
            "name": PROTOCOL_NAME, "type": "pointer-move", "x": 0.5, "y": 0.5
        })
    
    def test_transport_exception_returns_false(self):
        self.host.send_error = ConnectionError("data channel closed")
        self.assertFalse(self.channel.send("P1", create_start_event()))
    
    def test_refused_send_returns_false(self):
        self.host.refuse_sends = True
        self.assertFalse(self.channel.send("P1", create_start_event()))
    
    def test_host_returning_none_counts_as_sent(self):
        host = Mock()
        host.send_to_participant.return_value = None
        self.assertTrue(MessageChannel(host).send("P1", create_start_event()))
    
    def test_unserializable_event_returns_false(self):
        self.assertFalse(self.channel.send("P1", object()))
        self.assertEqual(self.host.sent, [])


class TestMessageChannelParse(unittest.TestCase):
    """Test cases for inbound frames."""
    
    def test_parse_endpoint_envelope(self):
        channel = MessageChannel(FakeHost())
        payload = {"name": ENDPOINT_TEXT_MESSAGE_NAME, "text": json.dumps(create_grant_event().to_frame())}
        self.assertEqual(channel.parse(payload).type, ControlEventTypes.GRANT)
    
    def test_unrelated_traffic_dropped(self):
        channel = MessageChannel(FakeHost())
        self.assertIsNone(channel.parse({"name": "endpoint-text-message", "text": '{"name": "polls", "type": "vote"}'}))
        self.assertIsNone(channel.parse({"name": "raise-hand"}))
        self.assertIsNone(channel.parse(b"\xff\xfe"))
    
    def test_kinds_outside_flavor_dropped(self):
        channel = MessageChannel(FakeHost(), allowed_types=DIRECT_EVENT_TYPES)
        self.assertIsNone(channel.parse({"name": PROTOCOL_NAME, "type": "grant"}))
        self.assertIsNotNone(channel.parse({"name": PROTOCOL_NAME, "type": "stop"}))


if __name__ == '__main__':
    unittest.main()
