"""Tests for ErrorReporter -- category-scoped clearing."""

from video_notes.l1_entities.errors import ErrorCategory, ErrorReport
from video_notes.l2_use_cases.error_reporter import ErrorReporter
from tests.conftest import RecordingObserver


class TestErrorReporter:
    def test_starts_empty(self):
        errors = ErrorReporter()
        assert errors.current is None
        assert errors.message is None

    def test_report_sets_current_and_notifies(self):
        observer = RecordingObserver()
        errors = ErrorReporter(observer)

        errors.report(ErrorCategory.MEDIA, 'permission denied')

        assert errors.current == ErrorReport(category=ErrorCategory.MEDIA, message='permission denied')
        assert observer.errors == [errors.current]

    def test_later_report_overwrites(self):
        errors = ErrorReporter()
        errors.report(ErrorCategory.MEDIA, 'first')
        errors.report(ErrorCategory.SUBMISSION, 'second')
        assert errors.message == 'second'

    def test_clear_same_category(self):
        observer = RecordingObserver()
        errors = ErrorReporter(observer)
        errors.report(ErrorCategory.SPEECH, 'no voice')

        errors.clear(ErrorCategory.SPEECH)

        assert errors.current is None
        assert observer.errors[-1] is None

    def test_clear_other_category_keeps_error(self):
        observer = RecordingObserver()
        errors = ErrorReporter(observer)
        errors.report(ErrorCategory.SUBMISSION, 'HTTP error! status: 500')

        errors.clear(ErrorCategory.MEDIA)

        assert errors.message == 'HTTP error! status: 500'
        assert len(observer.errors) == 1

    def test_clear_when_empty_does_not_notify(self):
        observer = RecordingObserver()
        errors = ErrorReporter(observer)
        errors.clear(ErrorCategory.MEDIA)
        assert observer.errors == []


class TestPersistentCapabilityError:
    def test_clearing_later_error_restores_capability_report(self):
        observer = RecordingObserver()
        errors = ErrorReporter(observer)
        errors.report(ErrorCategory.CAPABILITY, 'Speech recognition is not available on this system.')
        errors.report(ErrorCategory.MEDIA, 'device busy')

        errors.clear(ErrorCategory.MEDIA)

        assert errors.current == ErrorReport(
            category=ErrorCategory.CAPABILITY,
            message='Speech recognition is not available on this system.',
        )
        assert observer.errors[-1] == errors.current

    def test_capability_report_cannot_be_cleared(self):
        observer = RecordingObserver()
        errors = ErrorReporter(observer)
        errors.report(ErrorCategory.CAPABILITY, 'no recognizer')

        errors.clear(ErrorCategory.CAPABILITY)

        assert errors.message == 'no recognizer'
        assert len(observer.errors) == 1

    def test_clear_without_capability_report_empties_slot(self):
        errors = ErrorReporter()
        errors.report(ErrorCategory.MEDIA, 'device busy')
        errors.clear(ErrorCategory.MEDIA)
        assert errors.current is None
