import pytest
from colorlog.escape_codes import escape_codes, parse_colors

from went.config.model import DisplayTemplates
from went.display.colors import Colorizer, hashed_entry
from went.display.router import DisplayRouter
from went.irc.commands import LocalEcho
from went.irc.parser import parse_message
from went.logging_config import error_aggregator


def render(router, line):
    return router.render(parse_message(line))


class TestChat:
    def test_private_message_while_in_channel_is_tagged(self, router, session):
        session.set_focus("#test")
        assert render(router, ":carol!c@host PRIVMSG bob :hi") == "[bob] < carol> hi"

    def test_message_to_focused_channel_untagged(self, router, session):
        session.set_focus("#test")
        assert render(router, ":carol!c@h PRIVMSG #test :hello") == "< carol> hello"

    def test_message_to_other_channel_tagged(self, router, session):
        session.set_focus("#test")
        assert render(router, ":carol!c@h PRIVMSG #other :hello") == "[#other] < carol> hello"

    def test_private_message_keeps_tag_in_query_window(self, router, session):
        session.set_focus("carol")
        assert render(router, ":carol!c@h PRIVMSG bob :psst") == "[bob] < carol> psst"
        session.set_focus("bob")
        assert render(router, ":carol!c@h PRIVMSG bob :psst") == "[bob] < carol> psst"

    def test_verbose_always_tags(self, session):
        router = DisplayRouter(session, always_show_destination=True)
        session.set_focus("#test")
        assert render(router, ":carol!c@h PRIVMSG #test :hi") == "[#test] < carol> hi"

    def test_action(self, router, session):
        session.set_focus("#test")
        line = ":carol!c@h PRIVMSG #test :\x01ACTION waves\x01"
        assert render(router, line) == "* carol ~> waves"

    def test_notice_uses_chat_rendering(self, router, session):
        session.set_focus("#test")
        assert render(router, ":carol!c@h NOTICE #test :psst") == "< carol> psst"

    def test_chat_without_destination_is_diagnostic(self, router):
        out = render(router, ":carol!c@h PRIVMSG :lost")
        assert out == "-!- Unknown message type: :carol!c@h PRIVMSG :lost"
        assert error_aggregator.get_error_summary()["parse"]["total_count"] == 1


class TestEcho:
    def test_echo_to_focus_untagged(self, router, session):
        session.set_focus("#test")
        assert router.render_echo(LocalEcho("#test", "hello")) == "< bob> hello"

    def test_echo_elsewhere_tagged(self, router, session):
        session.set_focus("#test")
        assert router.render_echo(LocalEcho("carol", "hi")) == "[carol] < bob> hi"

    def test_action_echo(self, router, session):
        session.set_focus("#test")
        echo = LocalEcho("#test", "waves", is_action=True)
        assert router.render_echo(echo) == "* bob ~> waves"


class TestStructuralVerbs:
    def test_join(self, router):
        assert render(router, ":carol!c@h JOIN :#test") == "-JOIN- carol has joined #test"
        assert render(router, ":carol!c@h JOIN #test") == "-JOIN- carol has joined #test"

    def test_part(self, router):
        out = render(router, ":carol!c@h PART #test :bye")
        assert out == "-PART- carol has left #test (bye)"
        assert render(router, ":carol!c@h PART #test") == "-PART- carol has left #test"

    def test_quit(self, router):
        assert render(router, ":carol!c@h QUIT :Ping timeout") == "-QUIT- carol has quit (Ping timeout)"

    def test_server_nick_change_only_renders(self, router, session):
        out = render(router, ":bob!b@h NICK :robert")
        assert out == "-NICK- bob is now known as robert"
        assert session.identity == "bob"

    def test_kick(self, router):
        out = render(router, ":op!o@h KICK #test carol :flooding")
        assert out == "-KICK- op has kicked carol from #test (flooding)"

    def test_topic_change(self, router):
        out = render(router, ":carol!c@h TOPIC #test :new topic")
        assert out == "-TOPIC- carol set the topic of #test to new topic"

    def test_invite(self, router):
        out = render(router, ":carol!c@h INVITE bob :#secret")
        assert out == "-INVITE- carol invites you to #secret"

    def test_mode(self, router):
        assert render(router, ":bob MODE bob :+i") == "-MODE- bob +i"

    def test_channel_mode_reply(self, router):
        assert render(router, ":srv 324 bob #test :+nt") == "-MODE- #test +nt"

    def test_server_error(self, router):
        out = render(router, "ERROR :Closing Link: bob (Quit)")
        assert out == "-ERROR- -!- Closing Link: bob (Quit)"


class TestNumerics:
    def test_info(self, router):
        out = render(router, ":irc.example.net 001 bob :Welcome to the network")
        assert out == "-INFO- Welcome to the network"

    def test_error(self, router):
        out = render(router, ":irc.example.net 433 * bob :Nickname is already in use")
        assert out == "-ERROR- irc.example.net Nickname is already in use"

    def test_names(self, router):
        assert render(router, ":srv 353 bob = #test :bob carol @op") == "-NAMES- bob carol @op"

    def test_who(self, router):
        assert render(router, ":srv 311 bob carol c host * :Carol C") == "-WHO- bob: Carol C"

    def test_topic_reply(self, router):
        out = render(router, ":srv 332 bob #test :the topic")
        assert out == "-TOPIC- #test: the topic"
        out = render(router, ":srv 331 bob #test :No topic is set")
        assert out == "-TOPIC- #test: No topic is set"

    def test_topic_setter_reply(self, router):
        out = render(router, ":srv 333 bob #test carol 1700000000")
        assert out == "-TOPIC- #test carol 1700000000"

    def test_code_past_table_is_error(self, router):
        assert render(router, ":srv 1234 x") == "-ERROR- srv x"

    def test_ignored(self, router):
        assert render(router, ":srv 219 bob s :End of STATS report") is None

    def test_unknown_numeric_generic(self, router):
        out = render(router, ":srv 042 bob ABC123 :your unique ID")
        assert out == "srv 042 bob ABC123 your unique ID"


def test_unknown_verb_is_diagnostic(router):
    assert render(router, ":srv FOO bar") == "-!- Unknown message type: :srv FOO bar"


def test_prompt_and_notices(router):
    assert router.prompt("bob", "#test") == "[bob.#test] "
    assert router.focus_notice("#test") == "-WENT- Window focus changed to #test"
    assert router.render_error("Usage: /w <x>") == "-!- Usage: /w <x>"


def test_custom_templates(session):
    templates = DisplayTemplates(message="<{source}> {body}", prompt="{nick}@{window}> ")
    router = DisplayRouter(session, templates=templates)
    session.set_focus("#test")
    assert render(router, ":carol!c@h PRIVMSG #test :yo") == "<carol> yo"
    assert router.prompt("bob", "#test") == "bob@#test> "


class TestColoured:
    @pytest.fixture
    def colour_router(self, session):
        return DisplayRouter(session, Colorizer())

    def test_other_nick_gets_hashed_colour(self, colour_router, session):
        session.set_focus("#test")
        out = render(colour_router, ":carol!c@h PRIVMSG #test :hi")
        coloured = parse_colors(hashed_entry("carol")) + "carol" + escape_codes["reset"]
        assert out == f"< {coloured}> hi"

    def test_own_nick_uses_self_colour(self, colour_router, session):
        session.set_focus("#test")
        out = colour_router.render_echo(LocalEcho("#test", "hi"))
        assert out.startswith("< " + escape_codes["bold_cyan"] + "bob")

    def test_error_marker_coloured(self, colour_router):
        assert colour_router.render_error("boom").startswith(escape_codes["red"] + "-!-")
