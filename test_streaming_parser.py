#!/usr/bin/env python3
"""
Tests for the byte-level streaming parser and the chunk accumulator.
"""

import pytest

from chat_client.streaming.parser import ChunkAccumulator, StreamingParser


def feed_all(parser, chunks):
    payloads = []
    for chunk in chunks:
        payloads.extend(parser.feed(chunk))
        if parser.done:
            return payloads
    payloads.extend(parser.finish())
    return payloads


class TestStreamingParser:
    """Decoding, framing and sentinel handling."""

    def test_multibyte_character_split_across_chunks(self):
        raw = 'data: {"response":"héllo 你好"}\n\n'.encode()
        split_at = raw.index("你".encode()) + 1
        parser = StreamingParser()
        payloads = feed_all(parser, [raw[:split_at], raw[split_at:]])
        assert payloads == ['{"response":"héllo 你好"}']

    def test_byte_at_a_time(self):
        raw = 'data: {"response":"€"}\n\ndata: {"response":"😀"}\n\n'.encode()
        parser = StreamingParser()
        payloads = feed_all(parser, [raw[i:i + 1] for i in range(len(raw))])
        assert payloads == ['{"response":"€"}', '{"response":"😀"}']

    def test_sentinel_stops_and_discards_the_rest(self):
        parser = StreamingParser()
        payloads = parser.feed(
            b'data: {"response":"A"}\n\ndata: [DONE]\n\ndata: {"response":"C"}\n\ndata: {"re'
        )
        assert payloads == ['{"response":"A"}']
        assert parser.done
        assert parser.saw_sentinel
        assert parser.pending == ""
        assert parser.feed(b'sponse":"D"}\n\n') == []
        assert parser.finish() == []

    def test_finish_flushes_trailing_event(self):
        parser = StreamingParser()
        assert parser.feed(b'data: {"response":"tail"}') == []
        assert parser.finish() == ['{"response":"tail"}']
        assert parser.done
        assert not parser.saw_sentinel

    def test_sentinel_in_trailing_event(self):
        parser = StreamingParser()
        parser.feed(b'data: {"response":"A"}\n\ndata: [DONE]')
        assert parser.finish() == []
        assert parser.saw_sentinel

    def test_truncated_multibyte_at_end_is_replaced(self):
        parser = StreamingParser()
        parser.feed(b'data: x\xe2\x82')
        assert parser.finish() == ["x\ufffd"]

    def test_stats(self):
        parser = StreamingParser()
        parser.feed(b"data: a\n\n")
        parser.feed(b"data: b\n\ndata: c")
        stats = parser.get_stats()
        assert stats["total_chunks"] == 2
        assert stats["framed_events"] == 2


class TestChunkAccumulator:
    """Delta accumulation over payload strings."""

    def test_accumulates_both_schemas(self):
        accumulator = ChunkAccumulator()
        assert accumulator.process_event('{"response":"A"}') == "A"
        assert accumulator.process_event('{"choices":[{"delta":{"content":"B"}}]}') == "AB"
        assert accumulator.content == "AB"

    def test_malformed_events_are_skipped(self):
        accumulator = ChunkAccumulator()
        assert accumulator.process_event("not json") is None
        assert accumulator.process_event("{}") is None
        assert accumulator.process_event('{"response":"ok"}') == "ok"

        stats = accumulator.get_streaming_stats()
        assert stats.total_events == 3
        assert stats.content_events == 1
        assert stats.ignored_events == 2
        assert stats.content_length == 2


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
