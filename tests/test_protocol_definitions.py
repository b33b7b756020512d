#!/usr/bin/env python3
"""
Unit tests for the control protocol definitions.

Covers event construction, wire frames and inbound frame parsing.
"""

import json
import unittest

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

from remote_control.common.constants import PROTOCOL_NAME, ENDPOINT_TEXT_MESSAGE_NAME, ControlEventTypes
from remote_control.common.exceptions import InvalidControlEventError, ControlError
from remote_control.common.protocol_definitions import (
    ControlEvent, Rect, create_pointer_event, create_stop_event,
    create_endpoint_text_message, unwrap_endpoint_payload, parse_control_frame
)


class TestControlEvent(unittest.TestCase):
    """Test cases for ControlEvent construction."""
    
    def test_pointer_frame_carries_coordinates(self):
        event = create_pointer_event(ControlEventTypes.POINTER_MOVE, 0.5, 0.25)
        self.assertEqual(event.to_frame(), {
            "name": PROTOCOL_NAME,
            "type": "pointer-move",
            "x": 0.5,
            "y": 0.25
        })
    
    def test_non_pointer_frame_has_no_coordinates(self):
        frame = create_stop_event().to_frame()
        self.assertEqual(frame, {"name": PROTOCOL_NAME, "type": "stop"})
        self.assertNotIn("x", frame)
    
    def test_unknown_kind_rejected(self):
        with self.assertRaises(InvalidControlEventError):
            ControlEvent("teleport")
    
    def test_coordinates_outside_unit_square_rejected(self):
        with self.assertRaises(InvalidControlEventError):
            create_pointer_event(ControlEventTypes.POINTER_DOWN, 1.5, 0.5)
        with self.assertRaises(InvalidControlEventError):
            create_pointer_event(ControlEventTypes.POINTER_UP, 0.5, -0.01)
    
    def test_boundary_coordinates_accepted(self):
        event = create_pointer_event(ControlEventTypes.POINTER_UP, 0.0, 1.0)
        self.assertEqual((event.x, event.y), (0.0, 1.0))
    
    def test_coordinates_on_non_pointer_kind_rejected(self):
        with self.assertRaises(ControlError):
            ControlEvent(ControlEventTypes.POINTER_SHOW, 0.1, 0.1)
    
    def test_empty_rect(self):
        self.assertTrue(Rect(0, 0, 0, 100).is_empty())
        self.assertTrue(Rect(0, 0, 100, 0).is_empty())
        self.assertFalse(Rect(0, 0, 1, 1).is_empty())


class TestFrameParsing(unittest.TestCase):
    """Test cases for inbound frame parsing."""
    
    def test_envelope_unwraps_to_frame(self):
        envelope = create_endpoint_text_message({"name": PROTOCOL_NAME, "type": "grant"})
        self.assertEqual(envelope["name"], ENDPOINT_TEXT_MESSAGE_NAME)
        self.assertEqual(unwrap_endpoint_payload(envelope), {"name": PROTOCOL_NAME, "type": "grant"})
    
    def test_json_string_and_plain_dict_accepted(self):
        frame = {"name": PROTOCOL_NAME, "type": "deny"}
        self.assertEqual(unwrap_endpoint_payload(json.dumps(frame)), frame)
        self.assertEqual(unwrap_endpoint_payload(frame), frame)
    
    def test_undecodable_payloads(self):
        self.assertIsNone(unwrap_endpoint_payload("{not json"))
        self.assertIsNone(unwrap_endpoint_payload("[1, 2]"))
        self.assertIsNone(unwrap_endpoint_payload(42))
        self.assertIsNone(unwrap_endpoint_payload({"name": ENDPOINT_TEXT_MESSAGE_NAME}))
    
    def test_foreign_protocol_dropped(self):
        self.assertIsNone(parse_control_frame({"name": "chat", "type": "grant"}))
    
    def test_unknown_or_missing_type_dropped(self):
        self.assertIsNone(parse_control_frame({"name": PROTOCOL_NAME}))
        self.assertIsNone(parse_control_frame({"name": PROTOCOL_NAME, "type": "explode"}))
        self.assertIsNone(parse_control_frame({"name": PROTOCOL_NAME, "type": ["grant"]}))
    
    def test_pointer_frame_with_bad_coordinates_dropped(self):
        self.assertIsNone(parse_control_frame({"name": PROTOCOL_NAME, "type": "pointer-move", "x": 0.5}))
        self.assertIsNone(parse_control_frame({"name": PROTOCOL_NAME, "type": "pointer-move", "x": "0.5", "y": 0.5}))
        self.assertIsNone(parse_control_frame({"name": PROTOCOL_NAME, "type": "pointer-move", "x": 2, "y": 0.5}))
    
    def test_valid_pointer_frame_parsed(self):
        event = parse_control_frame({"name": PROTOCOL_NAME, "type": "pointer-down", "x": 0.2, "y": 0.8})
        self.assertEqual(event, ControlEvent(ControlEventTypes.POINTER_DOWN, 0.2, 0.8))


if __name__ == '__main__':
    unittest.main()
