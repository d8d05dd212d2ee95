"""Tests for infrastructure.i18n.context module."""

import pytest

from infrastructure.i18n import (
    PROVISIONAL_MARKER,
    ChangeReason,
    ConfigurationError,
    ResolutionMode,
)
from infrastructure.operations import OperationStatus
from tests.factories.i18n import EN_TABLE, make_context

pytestmark = pytest.mark.unit


class TestReload:
    """Tests for LocalizationContext.reload()."""

    def test_reload_loads_all_languages(self, locale_dir):
        """reload() fills the store from the loader."""
        context = make_context(locale_dir, reload=False)
        result = context.reload()

        assert result.is_success
        assert context.store.language_count() == 3

    def test_missing_index_is_load_error(self, tmp_path):
        """A storage root without locale.json fails with LOAD_ERROR."""
        context = make_context(tmp_path, reload=False)
        result = context.reload()

        assert result.status == OperationStatus.PERMANENT_ERROR
        assert result.error_code == "LOAD_ERROR"
        assert context.store.language_count() == 0

    def test_reload_picks_up_file_changes(self, context, locale_dir):
        """Edited files are visible after the next reload."""
        (locale_dir / "en.json").write_text('{"menu.play": "Start"}', encoding="utf-8")

        context.reload()

        assert context.resolver.resolve("menu.play") == "Start"
        assert context.store.key_count() == 1

    def test_overrides_merged_when_enabled(self, locale_dir):
        """load_overrides merges temp.json on every reload."""
        context = make_context(locale_dir, load_overrides=True)

        assert context.resolver.resolve("menu.quit") == PROVISIONAL_MARKER + "Exit"
        assert context.store.key_count() == len(EN_TABLE) + 1

    def test_overrides_absent_when_disabled(self, context):
        """Without load_overrides the fallback table is untouched."""
        assert context.resolver.resolve("menu.quit") == "Quit"

    def test_apply_overrides_without_file(self, tmp_path):
        """apply_overrides() is a no-op when there is no temp.json."""
        from tests.factories.i18n import write_locale_dir

        root = write_locale_dir(tmp_path / "locale", overrides=None)
        context = make_context(root)

        assert context.apply_overrides() == 0

    def test_apply_overrides_with_notify(self, context, recorded_events):
        """apply_overrides(notify=True) merges and notifies."""
        context.subscribe(recorded_events)

        assert context.apply_overrides(notify=True) == 2
        assert recorded_events.events[-1].event_type == ChangeReason.OVERRIDES_APPLIED.value


class TestLanguageSelection:
    """Tests for the active and fallback language setters."""

    def test_set_active_language_notifies(self, context, recorded_events):
        """A valid change switches lookups and notifies once."""
        context.subscribe(recorded_events)

        context.set_active_language("DE")

        assert context.active_language == "de"
        assert context.resolver.resolve("menu.play") == "Spielen"
        assert len(recorded_events.events) == 1
        event = recorded_events.events[0]
        assert event.event_type == ChangeReason.ACTIVE_LANGUAGE_CHANGED.value
        assert event.metadata == {"language": "de"}

    def test_set_fallback_language(self, context):
        """The fallback language becomes the key superset."""
        context.set_fallback_language("de")

        assert context.fallback_language == "de"
        assert context.store.key_count() == 4
        assert context.resolver.is_known_key("menu.quit") is False

    def test_unknown_language_raises_in_strict_mode(self, context, recorded_events):
        """Strict setters raise and leave state and observers untouched."""
        context.subscribe(recorded_events)

        with pytest.raises(ConfigurationError):
            context.set_active_language("xx")
        with pytest.raises(ConfigurationError):
            context.set_fallback_language("xx")

        assert context.active_language == "en"
        assert context.fallback_language == "en"
        assert recorded_events.events == []

    def test_unknown_language_in_compat_mode(self, locale_dir, recorded_events):
        """Compat setters keep state but still notify."""
        context = make_context(locale_dir, strict_language_setters=False)
        context.subscribe(recorded_events)

        context.set_active_language("xx")

        assert context.active_language == "en"
        assert [e.event_type for e in recorded_events.events] == [
            ChangeReason.ACTIVE_LANGUAGE_CHANGED.value
        ]

    def test_setter_before_load_rejects_everything(self, locale_dir):
        """No language is known before the first load."""
        context = make_context(locale_dir, reload=False)
        with pytest.raises(ConfigurationError):
            context.set_active_language("en")


class TestModeSelection:
    """Tests for set_mode() and set_mode_by_index()."""

    def test_set_mode_notifies(self, context, recorded_events):
        """Changing mode fires MODE_CHANGED with the mode value."""
        context.subscribe(recorded_events)

        context.set_mode(ResolutionMode.KEYS_ONLY)

        assert context.mode == ResolutionMode.KEYS_ONLY
        assert recorded_events.events[0].metadata == {"mode": "KeysOnly"}

    def test_set_mode_accepts_value_string(self, context):
        """Mode values are accepted as plain strings."""
        context.set_mode("HalfTranslated")
        assert context.mode == ResolutionMode.HALF_TRANSLATED

    @pytest.mark.parametrize(
        "index,expected",
        [
            (0, ResolutionMode.GAME_MODE),
            (1, ResolutionMode.HALF_TRANSLATED),
            (2, ResolutionMode.KEYS_ONLY),
        ],
    )
    def test_set_mode_by_index(self, context, index, expected):
        """Indexes follow declaration order."""
        context.set_mode_by_index(index)
        assert context.mode == expected

    @pytest.mark.parametrize("index", [-1, 3])
    def test_set_mode_by_bad_index(self, context, index):
        """Out of range indexes raise ConfigurationError."""
        with pytest.raises(ConfigurationError):
            context.set_mode_by_index(index)
        assert context.mode == ResolutionMode.GAME_MODE


class TestObservers:
    """Tests for subscribe() and unsubscribe()."""

    def test_reason_filter(self, context, recorded_events):
        """Observers can limit themselves to some reasons."""
        context.subscribe(recorded_events, reasons=[ChangeReason.LANGUAGES_LOADED])

        context.set_mode(ResolutionMode.KEYS_ONLY)
        context.reload()

        assert [e.event_type for e in recorded_events.events] == [
            ChangeReason.LANGUAGES_LOADED.value
        ]

    def test_unsubscribe(self, context, recorded_events):
        """Unsubscribed observers are not called."""
        context.subscribe(recorded_events)
        context.unsubscribe(recorded_events)

        context.reload()

        assert recorded_events.events == []

    def test_failing_observer_does_not_block_others(self, context, recorded_events):
        """An observer that raises does not stop later observers."""

        def broken(event):
            raise RuntimeError("boom")

        context.subscribe(broken)
        context.subscribe(recorded_events)

        context.reload()

        assert len(recorded_events.events) == 1

    def test_contexts_are_independent(self, locale_dir, recorded_events):
        """Two contexts do not share observers or state."""
        first = make_context(locale_dir)
        second = make_context(locale_dir)
        first.subscribe(recorded_events)

        second.set_active_language("de")

        assert recorded_events.events == []
        assert first.active_language == "en"
