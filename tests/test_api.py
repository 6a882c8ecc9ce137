"""
Endpoint tests with in-memory stores (see conftest.py).
"""
import uuid
from datetime import timedelta
from types import SimpleNamespace

from app.core.security import create_admin_token
from app.services.ranking_service import RankingQuery, RankingSort
from tests.conftest import ADMIN_PASSWORD, make_artist, make_post, make_song


class TestHealthEndpoints:
    def test_root(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert response.json()["name"] == "SongRank API"

    def test_health(self, client):
        assert client.get("/health").json() == {"status": "healthy"}


class TestAdminSession:
    def test_login_sets_cookie(self, client):
        response = client.post("/api/admin/login", json={"password": ADMIN_PASSWORD})
        assert response.status_code == 200
        assert "admin-auth=" in response.headers["set-cookie"]
        assert "httponly" in response.headers["set-cookie"].lower()

    def test_wrong_password(self, client):
        response = client.post("/api/admin/login", json={"password": "nope"})
        assert response.status_code == 401
        assert "set-cookie" not in response.headers

    def test_check_without_cookie(self, client):
        assert client.get("/api/admin/check").json() == {"authenticated": False}

    def test_check_with_cookie(self, admin_client):
        assert admin_client.get("/api/admin/check").json() == {"authenticated": True}

    def test_expired_cookie_is_rejected(self, client):
        client.cookies.set("admin-auth", create_admin_token(timedelta(seconds=-10)))
        assert client.get("/api/admin/check").json() == {"authenticated": False}

    def test_legacy_plain_cookie_is_rejected(self, client):
        client.cookies.set("admin-auth", "authenticated")
        assert client.get("/api/admin/check").json() == {"authenticated": False}

    def test_logout_clears_cookie(self, admin_client):
        response = admin_client.post("/api/admin/logout")
        assert response.status_code == 200
        assert "max-age=0" in response.headers["set-cookie"].lower()


class TestArtistRankings:
    def test_example_ranking(self, client, catalog_loader):
        catalog_loader.songs = [
            make_song("One", "A, B", 80),
            make_song("Two", "A", 60),
            make_song("Three", "C", 90),
        ]
        catalog_loader.artists = [make_artist("C", "http://img/c.jpg")]

        response = client.get("/api/artists/rankings")
        assert response.status_code == 200
        data = response.json()

        assert [(a["rank"], a["name"], a["average_rating"], a["song_count"]) for a in data["artists"]] == [
            (1, "C", 90, 1),
            (2, "B", 80, 1),
            (3, "A", 70, 2),
        ]
        assert data["artists"][0]["image_url"] == "http://img/c.jpg"
        assert data["artists"][0]["rating_color"] == "#66CC33"
        assert data["total"] == 3
        assert data["total_pages"] == 1
        assert data["query"] == ""
        assert data["next_query"] is None and data["prev_query"] is None

    def test_search_and_sort_echoed_as_query_string(self, client, catalog_loader):
        catalog_loader.songs = [make_song(artist="Alpha"), make_song(artist="Beta")]

        response = client.get("/api/artists/rankings", params={"q": "ALP", "sort": "songs-asc"})
        data = response.json()

        assert [a["name"] for a in data["artists"]] == ["Alpha"]
        assert data["artists"][0]["rank"] == 1
        assert data["sort"] == "songs-asc"
        assert data["query"] == "sort=songs-asc&q=ALP"

    def test_pagination_links(self, client, catalog_loader):
        catalog_loader.songs = [make_song(artist=f"Artist {i:03}", rating=i % 100) for i in range(120)]

        data = client.get("/api/artists/rankings", params={"page": 2}).json()

        assert len(data["artists"]) == 50
        assert data["artists"][0]["rank"] == 51
        assert data["total_pages"] == 3
        assert data["prev_query"] == ""
        assert data["next_query"] == "page=3"

    def test_page_past_the_end_is_empty(self, client, catalog_loader):
        catalog_loader.songs = [make_song(artist="A")]
        data = client.get("/api/artists/rankings", params={"page": 5}).json()
        assert data["artists"] == []
        assert data["total"] == 1

    def test_query_string_round_trips(self, client, catalog_loader):
        catalog_loader.songs = [make_song(artist=f"Sigur Rós {i:03}") for i in range(60)]
        query = RankingQuery(page=2, sort=RankingSort.SONGS_ASC, q="sigur rós")

        data = client.get(f"/api/artists/rankings?{query.to_query_string()}").json()

        assert (data["page"], data["sort"], data["q"]) == (2, "songs-asc", "sigur rós")
        assert data["query"] == query.to_query_string()
        assert data["prev_query"] == query.with_page(1).to_query_string()

    def test_invalid_sort(self, client):
        assert client.get("/api/artists/rankings", params={"sort": "name"}).status_code == 422

    def test_store_failure_is_reported(self, client, catalog_loader):
        catalog_loader.fail = True
        response = client.get("/api/artists/rankings")
        assert response.status_code == 503
        assert response.json()["detail"] == "Could not load data"

    def test_recomputed_on_every_request(self, client, catalog_loader):
        catalog_loader.songs = [make_song(artist="A", rating=10)]
        client.get("/api/artists/rankings")
        catalog_loader.songs = [make_song(artist="A", rating=90)]
        data = client.get("/api/artists/rankings").json()

        assert catalog_loader.calls == 2
        assert data["artists"][0]["average_rating"] == 90


class TestArtistSongs:
    def test_collaborations_included(self, client, song_store, artist_store):
        song_store.songs = [
            make_song("Solo", "A", 60),
            make_song("Duet", "B, A", 90),
            make_song("Other", "AB", 100),
        ]
        artist_store.artists = [make_artist("A", "http://img/a.jpg")]

        data = client.get("/api/artists/A/songs").json()

        assert [s["title"] for s in data["songs"]] == ["Duet", "Solo"]
        assert [s["rank"] for s in data["songs"]] == [1, 2]
        assert data["average_rating"] == 75
        assert data["image_url"] == "http://img/a.jpg"

    def test_name_with_slash(self, client, song_store):
        song_store.songs = [make_song("Thunderstruck", "AC/DC", 88)]

        response = client.get("/api/artists/AC%2FDC/songs")

        assert response.status_code == 200
        assert response.json()["name"] == "AC/DC"
        assert [s["title"] for s in response.json()["songs"]] == ["Thunderstruck"]

    def test_unknown_artist(self, client):
        assert client.get("/api/artists/Nobody/songs").status_code == 404

    def test_upsert_requires_admin(self, client, artist_store):
        response = client.post("/api/artists", json={"name": "A"})
        assert response.status_code == 401
        assert artist_store.artists == []

    def test_upsert(self, admin_client, artist_store):
        admin_client.post("/api/artists", json={"name": "A", "image_url": "old"})
        response = admin_client.post("/api/artists", json={"name": "A", "image_url": "new", "spotify_id": "sp1"})

        assert response.status_code == 200
        assert len(artist_store.artists) == 1
        assert artist_store.artists[0].image_url == "new"


class TestAlbums:
    def test_tracklist_order(self, client, song_store):
        song_store.songs = [
            make_song("Bonus", album_name="LP", track_number=None),
            make_song("Second", album_name="LP", track_number=2),
            make_song("First", album_name="LP", track_number=1, cover_url="http://img/lp.jpg"),
            make_song("Elsewhere", album_name="EP", track_number=1),
        ]

        data = client.get("/api/albums/LP/songs").json()

        assert [s["title"] for s in data["songs"]] == ["First", "Second", "Bonus"]
        assert data["cover_url"] == "http://img/lp.jpg"

    def test_album_name_with_slash(self, client, song_store):
        song_store.songs = [make_song("Track", album_name="Side A/Side B", track_number=1)]

        response = client.get("/api/albums/Side%20A%2FSide%20B/songs")

        assert response.status_code == 200
        assert response.json()["album_name"] == "Side A/Side B"

    def test_unknown_album(self, client):
        assert client.get("/api/albums/Nope/songs").status_code == 404


class TestSongs:
    def test_list_ranks_before_search(self, client, song_store):
        song_store.songs = [
            make_song("Low", "X", 10),
            make_song("High", "Y", 95, album_name="Peak"),
            make_song("Mid", "Z", 55),
        ]

        data = client.get("/api/songs").json()
        assert [(s["title"], s["rank"]) for s in data["songs"]] == [("High", 1), ("Mid", 2), ("Low", 3)]
        assert [s["rating_color"] for s in data["songs"]] == ["#66CC33", "#FFCC33", "#FF0000"]

        data = client.get("/api/songs", params={"q": "peak"}).json()
        assert [(s["title"], s["rank"]) for s in data["songs"]] == [("High", 1)]
        assert data["total"] == 1

    def test_song_detail_with_awards(self, client, song_store):
        song = make_song("Hit", "A", 100)
        song_store.songs = [song]
        song_store.awards = [SimpleNamespace(id=uuid.uuid4(), song_id=song.id, name="Song of the Year", detail="2024", position="1st")]

        data = client.get(f"/api/songs/{song.id}").json()

        assert data["title"] == "Hit"
        assert data["awards"][0]["name"] == "Song of the Year"

    def test_missing_song(self, client):
        assert client.get(f"/api/songs/{uuid.uuid4()}").status_code == 404

    def test_create_requires_admin_and_skips_store(self, client, song_store):
        response = client.post("/api/songs", json={"title": "T", "artist": "A", "rating": 50})
        assert response.status_code == 401
        assert song_store.calls == []

    def test_create(self, admin_client, song_store):
        response = admin_client.post(
            "/api/songs",
            json={"title": "T", "artist": "A, B", "rating": 88, "album_name": "LP"},
        )
        assert response.status_code == 201
        assert response.json()["artist"] == "A, B"
        assert len(song_store.songs) == 1

    def test_create_duplicate(self, admin_client, song_store):
        song_store.songs = [make_song("T", "A")]
        response = admin_client.post("/api/songs", json={"title": "T", "artist": "A", "rating": 50})

        assert response.status_code == 409
        assert "already exists" in response.json()["detail"]

    def test_rating_out_of_range_is_stored_but_color_clamped(self, admin_client):
        response = admin_client.post("/api/songs", json={"title": "T", "artist": "A", "rating": 120})
        assert response.json()["rating"] == 120
        assert response.json()["rating_color"] == "#66CC33"

    def test_update(self, admin_client, song_store):
        song = make_song("T", "A", 50)
        song_store.songs = [song]

        response = admin_client.patch(f"/api/songs/{song.id}", json={"rating": 75, "title": None})

        assert response.status_code == 200
        assert response.json()["rating"] == 75
        assert response.json()["title"] == "T"
        assert response.json()["updated_at"] is not None

    def test_update_requires_admin(self, client, song_store):
        song = make_song()
        song_store.songs = [song]
        assert client.patch(f"/api/songs/{song.id}", json={"rating": 1}).status_code == 401
        assert "update_song" not in song_store.calls

    def test_update_missing(self, admin_client):
        assert admin_client.patch(f"/api/songs/{uuid.uuid4()}", json={"rating": 1}).status_code == 404

    def test_search_for_admin(self, admin_client, song_store):
        song_store.songs = [make_song("Blue Monday", "New Order"), make_song("Karma Police", "Radiohead")]
        data = admin_client.get("/api/songs/search", params={"q": "blue"}).json()
        assert [s["title"] for s in data] == ["Blue Monday"]

    def test_delete_rating_history(self, admin_client, song_store):
        entry = SimpleNamespace(id=uuid.uuid4(), song_id=uuid.uuid4(), rating=40)
        song_store.history = [entry]

        assert admin_client.delete(f"/api/rating-history/{entry.id}").status_code == 200
        assert admin_client.delete(f"/api/rating-history/{entry.id}").status_code == 404


class TestBlog:
    def test_public_list_hides_drafts(self, client, blog_store):
        blog_store.posts = [make_post(slug="live"), make_post(slug="draft", published=False)]

        data = client.get("/api/blog", params={"all": "true"}).json()
        assert [p["slug"] for p in data] == ["live"]

    def test_admin_list_includes_drafts(self, admin_client, blog_store):
        blog_store.posts = [make_post(slug="live"), make_post(slug="draft", published=False)]

        data = admin_client.get("/api/blog", params={"all": "true"}).json()
        assert {p["slug"] for p in data} == {"live", "draft"}

    def test_post_by_slug_keeps_song_order(self, client, blog_store, song_store):
        first, second = make_song("First"), make_song("Second")
        song_store.songs = [first, second]
        blog_store.posts = [make_post(slug="rainy", song_ids=[str(second.id), str(uuid.uuid4()), str(first.id)])]

        data = client.get("/api/blog/slug/rainy").json()
        assert [s["title"] for s in data["songs"]] == ["Second", "First"]

    def test_draft_not_served_by_slug(self, client, blog_store):
        blog_store.posts = [make_post(slug="draft", published=False)]
        assert client.get("/api/blog/slug/draft").status_code == 404

    def test_create_generates_slug(self, admin_client, blog_store):
        song_id = uuid.uuid4()
        response = admin_client.post(
            "/api/blog",
            json={"title": "When To Listen: Rainy Days!", "content": "...", "song_ids": [str(song_id)]},
        )

        assert response.status_code == 201
        assert response.json()["slug"] == "when-to-listen-rainy-days"
        assert blog_store.posts[0].song_ids == [str(song_id)]

    def test_create_requires_admin(self, client, blog_store):
        assert client.post("/api/blog", json={"title": "T", "content": "C"}).status_code == 401
        assert blog_store.posts == []

    def test_create_requires_content(self, admin_client):
        assert admin_client.post("/api/blog", json={"title": "T"}).status_code == 422

    def test_update_and_delete(self, admin_client, blog_store):
        post = make_post()
        blog_store.posts = [post]

        response = admin_client.patch(f"/api/blog/{post.id}", json={"published": False, "slug": "New Slug"})
        assert response.json()["published"] is False
        assert response.json()["slug"] == "new-slug"

        assert admin_client.delete(f"/api/blog/{post.id}").status_code == 200
        assert admin_client.delete(f"/api/blog/{post.id}").status_code == 404
