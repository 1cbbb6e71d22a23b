"""Tests for the NMEA byte stream framer."""

import logging

from nmeakit.nmea.framer import MAX_SENTENCE_LENGTH, SentenceFramer

GSV_EMPTY = b"$GPGSV,1,1,00*79\r\n"
VTG_VALID = b"$GNVTG,054.7,T,034.4,M,005.5,N,010.2,K,A*3B\r\n"


class TestSentenceFramer:
    """Tests for SentenceFramer."""

    def test_single_sentence(self):
        assert SentenceFramer().feed(GSV_EMPTY) == [GSV_EMPTY.decode()]

    def test_several_sentences_in_one_chunk(self):
        result = SentenceFramer().feed(GSV_EMPTY + VTG_VALID)
        assert result == [GSV_EMPTY.decode(), VTG_VALID.decode()]

    def test_sentence_split_across_chunks(self):
        framer = SentenceFramer()
        data = VTG_VALID
        assert framer.feed(data[:10]) == []
        assert framer.feed(data[10:30]) == []
        assert framer.feed(data[30:]) == [data.decode()]

    def test_byte_at_a_time(self):
        framer = SentenceFramer()
        sentences = []
        for value in GSV_EMPTY + VTG_VALID:
            sentences += framer.feed(bytes([value]))
        assert len(sentences) == 2

    def test_leading_noise_dropped(self):
        assert SentenceFramer().feed(b"\x00\xffgarbage" + GSV_EMPTY) == [GSV_EMPTY.decode()]

    def test_truncated_sentence_resyncs(self, caplog):
        with caplog.at_level(logging.WARNING):
            result = SentenceFramer().feed(b"$GPGGA,1235" + GSV_EMPTY)
        assert result == [GSV_EMPTY.decode()]
        assert "truncated" in caplog.text

    def test_bad_checksum_dropped(self, caplog):
        result = SentenceFramer().feed(b"$GPGSV,1,1,00*78\r\n" + VTG_VALID)
        assert result == [VTG_VALID.decode()]
        assert "Dropped invalid sentence" in caplog.text

    def test_missing_checksum_dropped(self):
        assert SentenceFramer().feed(b"$GPGSV,1,1,00\r\n") == []

    def test_overlong_buffer_discarded(self, caplog):
        framer = SentenceFramer()
        assert framer.feed(b"$" + b"A" * MAX_SENTENCE_LENGTH) == []
        assert "without a line ending" in caplog.text
        # The next sentence is unaffected
        assert framer.feed(GSV_EMPTY) == [GSV_EMPTY.decode()]

    def test_reset_drops_partial_sentence(self):
        framer = SentenceFramer()
        framer.feed(GSV_EMPTY[:8])
        framer.reset()
        assert framer.feed(GSV_EMPTY[8:]) == []
        assert framer.feed(GSV_EMPTY) == [GSV_EMPTY.decode()]
