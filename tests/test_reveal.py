import pytest

from reveal_core.errors import ArticleNotFound, TokenNotBlurred, TokenNotFound
from reveal_core.ledger import RevealLedger
from reveal_core.models import TokenKind
from reveal_core.reveal import BLUR_PLACEHOLDER, RevealService, mask_tokens

from conftest import article_entry, make_store

USER_A = "0xaaaa"
USER_B = "0xbbbb"


def test_reveal_unlocks_every_instance(service):
    adam_ids = [t.id for t in service.store.get("adam").tokens if t.normalized == "adam"]
    assert adam_ids == ["w1", "w5"]

    result = service.reveal_word("adam", "w1", USER_A)

    assert result.text == "Adam"
    assert result.instance_count == 2
    assert result.message == 'Word revealed: "Adam" (2 instances unlocked)'
    view = service.render_masked("adam", USER_A)
    assert [v.text for v in view if v.is_revealed] == ["Adam", "Adam"]


def test_single_instance_message(service):
    article = service.store.get("adam-again")
    result = service.reveal_word("adam-again", article.tokens[0].id, USER_A)
    assert result.instance_count == 1
    assert result.message == 'Word revealed: "Adam"'


def test_unrevealed_tokens_show_placeholder(service):
    view = service.render_masked("adam", USER_A)
    blurred = [v for v in view if v.is_blurred]
    assert len(blurred) == 2
    assert all(v.text == BLUR_PLACEHOLDER and not v.is_revealed for v in blurred)


def test_render_preserves_length_and_order(service):
    for article in service.store:
        view = service.render_masked(article.id, USER_A)
        assert [v.id for v in view] == [t.id for t in article.tokens]


def test_non_blurred_tokens_are_never_revealed(service):
    service.reveal_word("adam", "w1", USER_A)
    view = service.render_masked("adam", USER_A)
    assert all(not v.is_revealed for v in view if not v.is_blurred)
    assert [v.text for v in view if not v.is_blurred] == ["started", "a", "company.", "worked", "hard."]


def test_phrase_reveal_returns_joined_text(service):
    ar = service.store.get("ar")
    reality = [t for t in ar.tokens if t.normalized == "reality"][0]

    result = service.reveal_word("ar", reality.id, USER_A)

    assert result.text == "augmented reality"
    assert result.revealed_words == frozenset({"augmented", "reality"})
    assert result.instance_count == 4
    view = service.render_masked("ar", USER_A)
    assert [v.text for v in view if v.is_blurred] == ["augmented", "reality", "augmented", "reality"]
    assert all(v.is_revealed for v in view if v.is_blurred)


def test_revealing_any_phrase_word_reveals_the_group(service):
    ar = service.store.get("ar")
    augmented = [t for t in ar.tokens if t.normalized == "augmented"][1]
    assert service.reveal_word("ar", augmented.id, USER_A).text == "augmented reality"
    assert all(v.is_revealed for v in service.render_masked("ar", USER_A) if v.is_blurred)


def test_same_word_is_revealed_across_phrase_and_single_targets():
    store = make_store(article_entry("mix", "augmented reality and reality", ["augmented reality", "reality"]))
    service = RevealService(store, RevealLedger())
    lone = store.get("mix").tokens[3]
    assert lone.phrase_group_id is None

    result = service.reveal_word("mix", lone.id, USER_A)

    assert result.text == "reality"
    assert result.instance_count == 2
    revealed = [(v.is_revealed, v.phrase_id) for v in service.render_masked("mix", USER_A) if v.is_blurred]
    assert revealed == [
        (False, "phrase-augmented-reality"),
        (True, "phrase-augmented-reality"),
        (True, None),
    ]


def test_reveal_is_idempotent(service):
    service.reveal_word("adam", "w1", USER_A)
    once = service.ledger.revealed(USER_A, "adam")
    service.reveal_word("adam", "w1", USER_A)
    assert service.ledger.revealed(USER_A, "adam") == once == frozenset({"adam"})
    assert len(service.ledger) == 1


def test_reveals_are_isolated_per_user(service):
    service.reveal_word("adam", "w1", USER_A)
    assert not any(v.is_revealed for v in service.render_masked("adam", USER_B))


def test_reveals_are_isolated_per_article(service):
    service.reveal_word("adam", "w1", USER_A)
    view = service.render_masked("adam-again", USER_A)
    assert view[0].text == BLUR_PLACEHOLDER
    assert not view[0].is_revealed


def test_anonymous_reveal_is_not_persisted(service):
    result = service.reveal_word("adam", "w1", None)
    assert result.text == "Adam"
    assert result.instance_count == 2
    assert len(service.ledger) == 0
    assert not any(v.is_revealed for v in service.render_masked("adam", None))


def test_unlocked_count_covers_whole_ledger():
    store = make_store(article_entry("two", "Adam met Eve. Adam left.", ["Adam", "Eve"]))
    service = RevealService(store, RevealLedger())
    service.reveal_word("two", "w1", USER_A)
    result = service.reveal_word("two", "w3", USER_A)
    assert result.instance_count == 1
    assert result.unlocked_count == 3
    assert result.message == 'Word revealed: "Eve." (3 instances unlocked)'


def test_unknown_token(service):
    with pytest.raises(TokenNotFound):
        service.reveal_word("adam", "w999", USER_A)


def test_token_from_another_article_is_unknown(service):
    other = service.store.get("ar").tokens[0].id
    with pytest.raises(TokenNotFound):
        service.reveal_word("adam", other, USER_A)


def test_not_blurred_token(service):
    with pytest.raises(TokenNotBlurred):
        service.reveal_word("adam", "w2", USER_A)
    assert len(service.ledger) == 0


def test_unknown_article(service):
    with pytest.raises(ArticleNotFound):
        service.reveal_word("nope", "w1", USER_A)
    with pytest.raises(ArticleNotFound):
        service.render_masked("nope", USER_A)


def test_markers_pass_through_masking():
    store = make_store(article_entry("md", "# Adam\n\n- Adam\n- Eve", ["Adam"]))
    view = mask_tokens(store.get("md"), frozenset())
    assert [v.type for v in view] == ["heading", "paragraph-break", "list-item", "line-break", "list-item"]
    assert view[0].level == 1
    assert view[1].text == ""
    assert view[1].type == TokenKind.PARAGRAPH_BREAK.value
