from types import SimpleNamespace

from fitgoals.core.session_events import SessionEvents, SessionState, state_for


def test_subscribe_and_unsubscribe():
    events = SessionEvents()
    seen = []
    unsubscribe = events.subscribe(lambda uid, state: seen.append((uid, state)))

    events.publish(1, SessionState.signed_in_pending_profile)
    unsubscribe()
    events.publish(1, SessionState.signed_out)

    assert seen == [(1, SessionState.signed_in_pending_profile)]


def test_unsubscribe_twice_is_harmless():
    events = SessionEvents()
    unsubscribe = events.subscribe(lambda uid, state: None)
    unsubscribe()
    unsubscribe()


def test_failing_subscriber_does_not_block_others():
    events = SessionEvents()
    seen = []

    def broken(uid, state):
        raise RuntimeError("boom")

    events.subscribe(broken)
    events.subscribe(lambda uid, state: seen.append(state))
    events.publish(7, SessionState.signed_in_onboarded)

    assert seen == [SessionState.signed_in_onboarded]


def test_state_for_user():
    assert state_for(None) is SessionState.signed_out
    assert state_for(SimpleNamespace(onboarded=False)) is SessionState.signed_in_pending_profile
    assert state_for(SimpleNamespace(onboarded=True)) is SessionState.signed_in_onboarded
