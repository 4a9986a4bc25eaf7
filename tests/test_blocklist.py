"""Test candidate blocklist and version classification"""

import pytest

from chart_resolver.matching.blocklist import BlocklistFilter, Classification


@pytest.fixture
def blocklist():
    return BlocklistFilter()


class TestBlocking:
    """Test is_blocked()"""

    def test_karaoke_and_instrumental_blocked(self, blocklist, make_entry, make_candidate):
        """Test karaoke and instrumental versions are blocked"""
        entry = make_entry()
        assert blocklist.is_blocked(entry, make_candidate(title="Lady (Karaoke Version)"))
        assert blocklist.is_blocked(entry, make_candidate(title="Lady - Instrumental"))
        assert not blocklist.is_blocked(entry, make_candidate(title="Lady"))

    def test_album_title_checked(self, blocklist, make_entry, make_candidate):
        """Test triggers in the album title also block"""
        candidate = make_candidate(title="Lady", album="Karaoke Hits 2001")
        assert blocklist.is_blocked(make_entry(), candidate)

    def test_trigger_in_entry_title_not_blocked(self, blocklist, make_entry, make_candidate):
        """Test a song titled with the trigger word is not excluded"""
        entry = make_entry(title="Karaoke Queen", artists=("Catatonia",))
        candidate = make_candidate(title="Karaoke Queen", artists=("Catatonia",))
        assert not blocklist.is_blocked(entry, candidate)

    def test_live_recording_blocked(self, blocklist, make_entry, make_candidate):
        """Test concert recordings are blocked, a live-titled album alone is not"""
        entry = make_entry()
        assert blocklist.is_blocked(entry, make_candidate(title="Lady - Live at Wembley"))
        assert blocklist.is_blocked(entry, make_candidate(title="Lady", album="Live in Paris"))
        assert not blocklist.is_blocked(entry, make_candidate(title="Lady", album="Modjo Live"))

    @pytest.mark.parametrize("title", ["Lady (Live)", "Lady - Live"])
    def test_live_in_title_blocked(self, blocklist, make_entry, make_candidate, title):
        """Test a plain live tag in the title blocks"""
        assert blocklist.is_blocked(make_entry(), make_candidate(title=title, album="Modjo"))

    def test_karaoke_artist_blocked(self, blocklist, make_entry, make_candidate):
        """Test karaoke acts are blocked even with a plain title and album"""
        candidate = make_candidate(
            title="Lady", artists=("Party Tyme Karaoke",), album="Hits of 2001"
        )
        assert blocklist.is_blocked(make_entry(), candidate)

    def test_karaoke_artist_in_entry_not_blocked(self, blocklist, make_entry, make_candidate):
        """Test a chart act named with the trigger keeps its own tracks"""
        entry = make_entry(title="Sing", artists=("Karaoke Kings",))
        candidate = make_candidate(title="Sing", artists=("Karaoke Kings",), album="Karaoke Party")
        assert not blocklist.is_blocked(entry, candidate)

    def test_live_song_title_not_blocked(self, blocklist, make_entry, make_candidate):
        """Test live recordings are allowed for songs with live in their title"""
        entry = make_entry(title="Live Is Life", artists=("Opus",), year=1985)
        candidate = make_candidate(title="Live Is Life - Live in Graz", artists=("Opus",))
        assert not blocklist.is_blocked(entry, candidate)
        assert not blocklist.is_live(entry, candidate)


class TestClassification:
    """Test live/remix/radio edit classification"""

    def test_live_word_boundary(self, blocklist, make_entry, make_candidate):
        """Test live is matched as a word, not inside Believe"""
        entry = make_entry(title="Believe", artists=("Cher",), year=1999)
        assert not blocklist.is_live(entry, make_candidate(title="Believe", album="Believe"))
        assert blocklist.is_live(entry, make_candidate(title="Believe - Live"))

    @pytest.mark.parametrize("title", [
        "Lady - Extended Mix",
        "Lady (Remix)",
        "Lady - Megamix",
        "Lady (Reloaded)",
        "Lady (Dub)",
        "Lady - New Version",
        "Mix Lady",
    ])
    def test_remix(self, blocklist, make_entry, make_candidate, title):
        """Test remix-like titles"""
        assert blocklist.is_remix(make_entry(), make_candidate(title=title))

    @pytest.mark.parametrize("title", [
        "Lady",
        "Lady - Radio Mix",
        "Dubai Lady",
        "Lady - Mixed Feelings",
    ])
    def test_not_remix(self, blocklist, make_entry, make_candidate, title):
        """Test titles that are not remixes"""
        assert not blocklist.is_remix(make_entry(), make_candidate(title=title))

    def test_remix_word_in_entry_title(self, blocklist, make_entry, make_candidate):
        """Test the entry title suppresses its own trigger words"""
        entry = make_entry(title="Mix It Up", artists=("Someone",))
        assert not blocklist.is_remix(entry, make_candidate(title="Mix It Up"))

    def test_remix_ignores_album(self, blocklist, make_entry, make_candidate):
        """Test only the candidate title is classified"""
        candidate = make_candidate(title="Lady", album="Club Remix Collection")
        assert not blocklist.is_remix(make_entry(), candidate)

    @pytest.mark.parametrize("title", [
        "Lady - Radio Edit",
        "Lady (Radio Version)",
        "Lady - Radio Mix",
    ])
    def test_radio_edit(self, blocklist, make_entry, make_candidate, title):
        """Test radio edit titles"""
        assert blocklist.is_radio_edit(make_entry(), make_candidate(title=title))

    def test_radio_edit_suppressed_by_remix(self, blocklist, make_entry, make_candidate):
        """Test a remix is never also a radio edit"""
        candidate = make_candidate(title="Lady - Radio Edit Remix")
        assert blocklist.is_remix(make_entry(), candidate)
        assert not blocklist.is_radio_edit(make_entry(), candidate)

    def test_classify(self, blocklist, make_entry, make_candidate):
        """Test classify() combines every flag"""
        result = blocklist.classify(make_entry(), make_candidate(title="Lady", album="Modjo Live"))
        assert result == Classification(blocked=False, live=True, remix=False, radio_edit=False)

    def test_live_title_blocked_and_flagged(self, blocklist, make_entry, make_candidate):
        """Test a live-titled track is both blocked and classified live"""
        result = blocklist.classify(make_entry(), make_candidate(title="Lady (Live)"))
        assert result.blocked
        assert result.live
