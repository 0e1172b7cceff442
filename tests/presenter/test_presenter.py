"""Tests for single-item presentation."""

import pytest
from flexible_presenter import FlexiblePresenter, SourceKind, lazy
from flexible_presenter.utils.errors import InvalidPresenterKeys, InvalidPresenterPreset
from support.models import Row, make_image, make_post
from support.presenters import (
    CommentPresenter,
    CountingPresenter,
    DetailedPostPresenter,
    PostPresenter,
    RowPresenter,
    StandalonePresenter,
)


def full_post(post, comment_count=0):
    return {
        "id": post.id,
        "title": post.title,
        "body": post.body,
        "published_at": "2020-01-01",
        "comment_count": comment_count,
    }


class TestConstruction:
    """Test input classification."""

    def test_make_wraps_single_item(self, post):
        presenter = PostPresenter.make(post)

        assert isinstance(presenter, FlexiblePresenter)
        assert presenter.kind is SourceKind.ITEM
        assert presenter.resource.id == post.id

    def test_collection_wraps_sequence(self, posts):
        presenter = PostPresenter.collection(posts)

        assert presenter.kind is SourceKind.SEQUENCE
        assert len(presenter.collection) == 3

    def test_collection_wraps_generator(self, posts):
        presenter = PostPresenter.collection(post for post in posts)

        assert presenter.kind is SourceKind.SEQUENCE
        assert len(presenter.collection) == 3

    def test_collection_wraps_single_item_in_list(self, post):
        presenter = PostPresenter.collection(post)

        assert presenter.kind is SourceKind.SEQUENCE
        assert presenter.get() == [full_post(post)]

    def test_new_wraps_nothing(self):
        presenter = StandalonePresenter.new()

        assert presenter.kind is SourceKind.ABSENT
        assert presenter.resource is None
        assert presenter.collection is None
        assert presenter.get() is None

    def test_make_keeps_tuple_record_whole(self):
        presenter = RowPresenter.make(Row(1, "a"))

        assert presenter.kind is SourceKind.ITEM
        assert presenter.get() == {"id": 1, "title": "a"}

    def test_none_resolves_to_no_data(self):
        assert PostPresenter.make(None).get() is None
        assert PostPresenter.collection(None).get() is None
        assert PostPresenter.collection(None).kind is SourceKind.ABSENT

    def test_attribute_access_delegates_to_resource(self, post):
        presenter = PostPresenter.make(post)

        assert presenter.title == post.title
        with pytest.raises(AttributeError):
            presenter.missing_attribute

    def test_attribute_access_without_resource_fails(self):
        with pytest.raises(AttributeError):
            PostPresenter.new().title


class TestSelection:
    """Test only/except_/with_ filtering."""

    def test_all_catalog_keys_returned_by_default(self, post_with_comments):
        result = PostPresenter.make(post_with_comments).get()

        assert result == full_post(post_with_comments, comment_count=3)

    def test_only_restricts_keys(self, post):
        result = PostPresenter.make(post).only("id", "title").get()

        assert result == {"id": post.id, "title": post.title}

    def test_only_accepts_lists(self, post):
        result = PostPresenter.make(post).only(["title", ("body",)]).get()

        assert result == {"title": post.title, "body": post.body}

    def test_only_accumulates_across_calls(self, post):
        result = PostPresenter.make(post).only("id").only(["title", "id"]).get()

        assert result == {"id": post.id, "title": post.title}

    def test_force_only_replaces_previous_keys(self, post):
        presenter = PostPresenter.make(post).only("id", "title").force_only("body")

        assert presenter.include_keys == ["body"]
        assert presenter.get() == {"body": post.body}

    def test_except_removes_keys(self, post):
        result = PostPresenter.make(post).except_("body", "published_at", "comment_count").get()

        assert result == {"id": post.id, "title": post.title}

    def test_except_accepts_lists_and_accumulates(self, post):
        result = PostPresenter.make(post).except_(["id", "title"]).except_("comment_count").get()

        assert result == {"body": post.body, "published_at": "2020-01-01"}

    def test_force_except_replaces_previous_keys(self, post):
        result = PostPresenter.make(post).except_("id", "title").force_except("comment_count").get()

        assert list(result) == ["id", "title", "body", "published_at"]

    def test_only_and_except_combined(self, post):
        result = PostPresenter.make(post).only("id", "title", "body").except_("title").get()

        assert result == {"id": post.id, "body": post.body}

    def test_filtering_keeps_catalog_order(self, post):
        result = PostPresenter.make(post).only("body", "id").get()

        assert list(result) == ["id", "body"]

    def test_chaining_returns_same_instance(self, post):
        presenter = PostPresenter.make(post)

        assert presenter.only("id") is presenter
        assert presenter.except_("title") is presenter
        assert presenter.with_(lambda item: {}) is presenter
        assert presenter.appends({}) is presenter
        assert presenter.using(scope="x") is presenter

    def test_with_adds_new_keys(self, post_with_comments):
        result = PostPresenter.make(post_with_comments).with_(lambda post: {"new_key": "foo"}).get()

        assert result == {**full_post(post_with_comments, comment_count=3), "new_key": "foo"}
        assert list(result)[-1] == "new_key"

    def test_with_overwrites_existing_keys(self, post):
        result = PostPresenter.make(post).with_(
            lambda item: {"published_at": item.published_at.strftime("%a, %b %d, %Y")}
        ).get()

        assert result["published_at"] == "Wed, Jan 01, 2020"
        assert list(result) == ["id", "title", "body", "published_at", "comment_count"]

    def test_with_keys_survive_only_and_except(self, post):
        result = (
            PostPresenter.make(post)
            .only("id")
            .except_("title")
            .with_(lambda item: {"slug": f"post-{item.id}"})
            .get()
        )

        assert result == {"id": post.id, "slug": "post-1"}

    def test_with_keys_are_valid_selection_keys(self, post):
        result = PostPresenter.make(post).with_(lambda item: {"slug": "x"}).only("slug").get()

        assert result == {"slug": "x"}

    def test_repeated_with_calls_merge(self, post):
        result = (
            PostPresenter.make(post)
            .only("id")
            .with_(lambda item: {"a": 1})
            .with_(lambda item: {"b": 2})
            .get()
        )

        assert result == {"id": post.id, "a": 1, "b": 2}


class TestInvalidKeys:
    """Test key validation."""

    def test_invalid_only_key_raises(self, post):
        with pytest.raises(InvalidPresenterKeys) as exc_info:
            PostPresenter.make(post).only("bad_key").get()

        assert exc_info.value.keys == ["bad_key"]
        assert exc_info.value.method == "only"
        assert str(exc_info.value) == "Invalid keys passed to only() method. The invalid key is: bad_key"

    def test_invalid_except_keys_are_enumerated(self, post):
        with pytest.raises(InvalidPresenterKeys) as exc_info:
            PostPresenter.make(post).except_("id", "foo", "bar", "baz").get()

        assert exc_info.value.keys == ["foo", "bar", "baz"]
        assert exc_info.value.method == "except_"
        assert str(exc_info.value).endswith("The invalid keys are: foo, bar and baz")

    def test_validation_happens_at_resolution_time(self, post):
        presenter = PostPresenter.make(post).only("bad_key")

        with pytest.raises(InvalidPresenterKeys):
            presenter.get()

    def test_invalid_keys_ignored_for_missing_item(self):
        assert PostPresenter.make(None).only("bad_key").get() is None

    def test_invalid_keys_raised_for_collection_elements(self, posts):
        with pytest.raises(InvalidPresenterKeys):
            PostPresenter.collection(posts).only("bad_key").get()


class TestPresets:
    """Test preset dispatch."""

    def test_preset_restricts_keys(self, post):
        result = PostPresenter.make(post).preset("summary").get()

        assert result == {"title": post.title, "body": post.body}

    def test_preset_returns_presenter(self, post):
        presenter = PostPresenter.make(post)

        assert presenter.preset("summary") is presenter

    def test_unknown_preset_raises(self, post):
        with pytest.raises(InvalidPresenterPreset) as exc_info:
            PostPresenter.make(post).preset("missing")

        assert exc_info.value.preset == "missing"
        assert "PostPresenter" in str(exc_info.value)

    def test_presets_are_inherited(self, post):
        result = DetailedPostPresenter.make(post).only("id").preset("headline").get()

        assert result == {"title": post.title}
        assert DetailedPostPresenter.make(post).preset("summary").get() == {"title": post.title, "body": post.body}

    def test_subclass_presets_do_not_leak_to_parent(self, post):
        with pytest.raises(InvalidPresenterPreset):
            PostPresenter.make(post).preset("headline")

    def test_conditional_relation_is_none_when_not_loaded(self, post_with_comments):
        result = PostPresenter.make(post_with_comments).preset("conditional_relations").get()

        assert result["comments"] is None
        assert post_with_comments.queries == 1

    def test_conditional_relation_presented_when_loaded(self, post_with_comments):
        post_with_comments.load("comments")

        result = PostPresenter.make(post_with_comments).preset("conditional_relations").get()

        assert result["comments"] == [
            {"id": 1, "body": "Comment 1"},
            {"id": 2, "body": "Comment 2"},
            {"id": 3, "body": "Comment 3"},
        ]

    def test_pivot_data_on_nested_presenter(self, post):
        post._relation_sources["images"] = [make_image(image_id, f"foo_{image_id}") for image_id in (1, 2, 3)]
        post.load("images")

        result = PostPresenter.make(post).preset("pivot_relations").get()

        assert result["images"] == [
            {"id": 1, "url": "foo", "test": "foo_1"},
            {"id": 2, "url": "foo", "test": "foo_2"},
            {"id": 3, "url": "foo", "test": "foo_3"},
        ]

    def test_when_loaded_requires_relation_support(self):
        presenter = StandalonePresenter.make(object())

        with pytest.raises(TypeError):
            presenter.when_loaded("comments")

    def test_when_loaded_reads_given_resource(self, post):
        other = make_post(2, comment_count=1).load("comments")
        presenter = PostPresenter.make(post)

        assert presenter.when_loaded("comments") is None
        assert [comment.id for comment in presenter.when_loaded("comments", other)] == [1]


class TestResolution:
    """Test deferred evaluation and nested presenters."""

    def test_deferred_fields_not_evaluated_unless_selected(self, post_with_comments):
        PostPresenter.make(post_with_comments).only("id").get()

        assert post_with_comments.queries == 0

        PostPresenter.make(post_with_comments).only("id", "comment_count").get()

        assert post_with_comments.queries == 1

    def test_excluded_deferred_field_never_runs(self, post):
        result = CountingPresenter.make(post).except_("expensive", "scoped").get()

        assert result == {"id": 1, "cheap": 10}
        assert CountingPresenter.calls == {"cheap": 1}

    def test_included_deferred_field_runs_once(self, post):
        CountingPresenter.make(post).only("expensive").get()

        assert CountingPresenter.calls == {"expensive": 1}

    def test_context_aware_producer_receives_params(self, post):
        presenter = CountingPresenter.make(post).only("scoped")

        assert presenter.get() == {"scoped": "public"}
        assert CountingPresenter.make(post).only("scoped").using(scope="admin").get() == {"scoped": "admin"}

    def test_nested_presenter_in_with(self, post_with_comments):
        result = PostPresenter.make(post_with_comments).only("title").with_(lambda post: {
            "comments": CommentPresenter.collection(post.comments).only("id"),
        }).get()

        assert result == {
            "title": post_with_comments.title,
            "comments": [{"id": 1}, {"id": 2}, {"id": 3}],
        }

    def test_deferred_supplemental_values_are_resolved(self, post):
        result = PostPresenter.make(post).only("id").with_(lambda item: {"double": lazy(lambda: item.id * 2)}).get()

        assert result == {"id": 1, "double": 2}

    def test_all_ignores_selection(self, post_with_comments):
        presenter = PostPresenter.make(post_with_comments).only("id").except_("title").with_(lambda post: {"x": 1})

        assert presenter.all() == full_post(post_with_comments, comment_count=3)

    def test_all_is_idempotent(self, post_with_comments):
        first = PostPresenter.make(post_with_comments).all()
        second = PostPresenter.make(post_with_comments).all()

        assert first == second

    def test_all_skips_validation(self, post):
        assert PostPresenter.make(post).only("bad_key").all() == full_post(post)

    def test_all_for_missing_item(self):
        assert PostPresenter.make(None).all() is None
        assert PostPresenter.new().all() is None

    def test_to_plain_data_matches_get(self, post):
        presenter = PostPresenter.make(post).only("id")

        assert presenter.to_plain_data() == {"id": post.id}
