"""
Structural disqualification and version classification of candidates.

Blocked candidates (karaoke, instrumental, live recordings) are never
selected, whatever they would score. Remixes, radio edits and studio
tracks on live-titled albums are not blocked; they are classified here
and priced by the scoring engine.

Every trigger is checked with word-boundary containment on normalized
text, so "live" does not fire on "Believe" and "dub" does not fire on
"Dubai". A trigger is ignored when the chart entry itself contains it:
a song called "Live Is Life" must be able to match a track with "Live"
in its title, and a chart act named "... Karaoke" its own releases.
"""

from dataclasses import dataclass

from chart_resolver.catalog.models import CandidateTrack, SourceEntry
from chart_resolver.matching.normalize import contains_phrase, normalize


KARAOKE_WORD = "karaoke"
BLOCKED_WORDS = ("instrumental",)

LIVE_WORD = "live"

# Album markers that identify a concert recording rather than a studio
# track that happens to sit on a live-titled album
LIVE_RECORDING_PHRASES = (
    "live at",
    "live in",
    "live from",
    "live on",
    "live version",
    "live recording",
)

REMIX_WORDS = ("remix", "megamix", "reloaded", "dub")
REMIX_PHRASES = ("new version",)
MIX_WORD = "mix"
RADIO_WORD = "radio"

RADIO_EDIT_PHRASES = ("radio edit", "radio version", "radio mix")


@dataclass(frozen=True)
class Classification:
    """
    Version flags of one candidate relative to one entry.

    Attributes:
        blocked: Karaoke, instrumental or live recording.
        live: Mentions "live" in title or album.
        remix: Title looks like a remix or alternative mix.
        radio_edit: Title looks like a radio edit (never set with remix).
    """
    blocked: bool
    live: bool
    remix: bool
    radio_edit: bool


def _title_text(candidate: CandidateTrack) -> str:
    return normalize(candidate.title) or ""


def _title_and_album_text(candidate: CandidateTrack) -> str:
    return normalize(f"{candidate.title} {candidate.album_title}") or ""


class BlocklistFilter:
    """
    Classifies candidates for one entry.

    Stateless; the entry is passed with every call.

    Example:
        blocklist = BlocklistFilter()
        welcome = [c for c in pool if not blocklist.is_blocked(entry, c)]
    """

    def is_blocked(self, entry: SourceEntry, candidate: CandidateTrack) -> bool:
        """
        Check whether a candidate is structurally disqualified.

        Karaoke and instrumental triggers are looked up in the normalized
        title and album; karaoke also in every candidate artist name, so
        "Lady" by "Party Tyme Karaoke" is caught. "live" blocks when it
        appears in the title, or as a concert phrase ("live at", ...) in
        the album.
        """
        entry_title = normalize(entry.title) or ""
        text = _title_and_album_text(candidate)

        if self._is_karaoke(entry, candidate):
            return True

        for word in BLOCKED_WORDS:
            if contains_phrase(text, word) and not contains_phrase(entry_title, word):
                return True

        if contains_phrase(entry_title, LIVE_WORD):
            return False
        if contains_phrase(_title_text(candidate), LIVE_WORD):
            return True
        return any(contains_phrase(text, phrase) for phrase in LIVE_RECORDING_PHRASES)

    def _is_karaoke(self, entry: SourceEntry, candidate: CandidateTrack) -> bool:
        entry_texts = [entry.title, *entry.artists]
        if any(contains_phrase(normalize(t) or "", KARAOKE_WORD) for t in entry_texts):
            return False

        candidate_texts = [candidate.title, candidate.album_title, *candidate.artist_names]
        return any(contains_phrase(normalize(t) or "", KARAOKE_WORD) for t in candidate_texts)

    def is_live(self, entry: SourceEntry, candidate: CandidateTrack) -> bool:
        entry_title = normalize(entry.title) or ""
        if contains_phrase(entry_title, LIVE_WORD):
            return False
        return contains_phrase(_title_and_album_text(candidate), LIVE_WORD)

    def is_remix(self, entry: SourceEntry, candidate: CandidateTrack) -> bool:
        """
        Check whether the candidate title looks like a remix.

        "mix" counts unless it directly follows "radio" ("Radio Mix" is a
        radio edit, "Extended Mix" is a remix).
        """
        entry_title = normalize(entry.title) or ""
        title = _title_text(candidate)

        for trigger in REMIX_WORDS + REMIX_PHRASES:
            if contains_phrase(title, trigger) and not contains_phrase(entry_title, trigger):
                return True

        if contains_phrase(entry_title, MIX_WORD):
            return False
        tokens = title.split()
        return any(
            token == MIX_WORD and (index == 0 or tokens[index - 1] != RADIO_WORD)
            for index, token in enumerate(tokens)
        )

    def is_radio_edit(self, entry: SourceEntry, candidate: CandidateTrack) -> bool:
        if self.is_remix(entry, candidate):
            return False
        title = _title_text(candidate)
        return any(contains_phrase(title, phrase) for phrase in RADIO_EDIT_PHRASES)

    def classify(self, entry: SourceEntry, candidate: CandidateTrack) -> Classification:
        return Classification(
            blocked=self.is_blocked(entry, candidate),
            live=self.is_live(entry, candidate),
            remix=self.is_remix(entry, candidate),
            radio_edit=self.is_radio_edit(entry, candidate),
        )
