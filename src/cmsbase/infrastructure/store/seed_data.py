"""Example collections and items loaded into a fresh store.

The dataset describes a football card catalogue: players, their cards,
image renders and long-form player reviews. Seed item counts are not
stored here; the store derives them from the seeded items.
"""

from typing import Any

SEED_UPDATED_AT = "2024-12-18T10:00:00Z"


def _fields(*definitions: tuple[str, str, str, bool]) -> list[dict[str, Any]]:
    """Expand (name, key, type, required) tuples into field dicts with f1..fN ids."""
    return [
        {"id": f"f{index}", "name": name, "key": key, "type": field_type, "required": required}
        for index, (name, key, field_type, required) in enumerate(definitions, start=1)
    ]


_REVIEW_STAT_FIELDS = [(f"Stats {n}", f"stats{n}", "number", True) for n in range(1, 7)]
_REVIEW_STAT_TYPE_FIELDS = [(f"St Type {n}", f"st_type{n}", "text", True) for n in range(1, 7)]
_REVIEW_SKILL_IMAGE_FIELDS = [(f"Skill Image {n}", f"skillImage{n}", "text", False) for n in range(1, 7)]
_REVIEW_SKILL_FIELDS = [(f"Skill {n}", f"skill{n}", "text", False) for n in range(1, 7)]

SEED_COLLECTIONS: list[dict[str, Any]] = [
    {
        "id": "col_players",
        "name": "Players",
        "slug": "players",
        "fields": _fields(
            ("Name", "name", "text", True),
            ("Position", "position", "text", True),
            ("Team", "team", "text", False),
            ("Overall Rating", "overall_rating", "number", True),
            ("Nationality", "nationality", "text", False),
            ("Photo", "photo", "image", False),
            ("Age", "age", "number", False),
            ("Active", "active", "boolean", False),
        ),
        "created_at": "2024-01-15T10:00:00Z",
    },
    {
        "id": "col_cards",
        "name": "Cards",
        "slug": "cards",
        "fields": _fields(
            ("Card Name", "card_name", "text", True),
            ("Player", "player", "reference", True),
            ("Card Type", "card_type", "text", True),
            ("Rating", "rating", "number", True),
            ("Card Image", "card_image", "image", False),
            ("Release Date", "release_date", "date", False),
            ("Is Special", "is_special", "boolean", False),
            ("Price", "price", "number", False),
        ),
        "created_at": "2024-02-10T10:00:00Z",
    },
    {
        "id": "col_renders",
        "name": "Renders",
        "slug": "renders",
        "fields": _fields(
            ("Title", "title", "text", True),
            ("Player", "player", "reference", True),
            ("Image URL", "image_url", "image", True),
            ("Category", "category", "text", False),
            ("Description", "description", "richtext", False),
            ("Is Featured", "is_featured", "boolean", False),
        ),
        "created_at": "2024-03-05T10:00:00Z",
    },
    {
        "id": "col_player_reviews",
        "name": "Player Reviews",
        "slug": "player-reviews",
        "fields": _fields(
            ("Owner ID", "ownerId", "text", True),
            ("Player Name", "playerName", "text", True),
            ("Event Name", "eventName", "text", True),
            ("Pros", "pros", "text", True),
            ("Cons", "cons", "text", True),
            ("Verdict", "verdict", "text", True),
            ("Rating", "rating", "number", True),
            *_REVIEW_STAT_FIELDS,
            *_REVIEW_STAT_TYPE_FIELDS,
            ("Image Review", "imageReview", "text", False),
            ("Reviewee", "reviewee", "text", False),
            ("Alt 1", "alt1", "text", False),
            ("Alt 2", "alt2", "text", False),
            ("Alt 3", "alt3", "text", False),
            ("R Link", "rlink", "text", False),
            ("Player Reviews Players", "playerReviews_players", "text", False),
            ("URL Review", "urlReview", "text", False),
            ("Partner ID", "partnerId", "text", False),
            ("Partner Name", "partnerName", "text", False),
            ("Partner URL", "partnerUrl", "text", False),
            ("Player Reviews List", "playerReviews_list", "text", False),
            ("Player Reviews Item", "playerReviews_item", "text", False),
            *_REVIEW_SKILL_IMAGE_FIELDS,
            *_REVIEW_SKILL_FIELDS,
            ("WF 1", "wf_1", "text", False),
            ("SM 1", "sm1", "text", False),
            ("ST 1", "st1", "text", False),
            ("Position", "pos", "text", False),
            ("Rev Cred", "rev_cred", "text", False),
            ("Rev Cred URL", "rev_cred_url", "text", False),
            ("URL Slug Copy", "urlSlugCopy", "text", False),
        ),
        "created_at": "2024-04-20T10:00:00Z",
    },
]


def _player(item_id: str, created_at: str, **data: Any) -> dict[str, Any]:
    return {"id": item_id, "collection_id": "col_players", "data": data, "created_at": created_at}


def _review(item_id: str, created_at: str, stats: list[int], **data: Any) -> dict[str, Any]:
    data.update({f"stats{n}": value for n, value in enumerate(stats, start=1)})
    data.update(
        {
            f"st_type{n}": label
            for n, label in enumerate(
                ["Pace", "Shooting", "Passing", "Dribbling", "Defending", "Physical"], start=1
            )
        }
    )
    return {"id": item_id, "collection_id": "col_player_reviews", "data": data, "created_at": created_at}


SEED_ITEMS: list[dict[str, Any]] = [
    _player(
        "item_p1", "2024-01-15T10:00:00Z",
        name="Lionel Messi", position="RW", team="Inter Miami", overall_rating=91,
        nationality="Argentina", photo="/messi-football-player.jpg", age=36, active=True,
    ),
    _player(
        "item_p2", "2024-01-16T10:00:00Z",
        name="Cristiano Ronaldo", position="ST", team="Al Nassr", overall_rating=88,
        nationality="Portugal", photo="/ronaldo-football-player.jpg", age=39, active=True,
    ),
    _player(
        "item_p3", "2024-01-17T10:00:00Z",
        name="Kylian Mbappe", position="ST", team="Real Madrid", overall_rating=91,
        nationality="France", photo="/mbappe-football-player.jpg", age=25, active=True,
    ),
    _player(
        "item_p4", "2024-01-18T10:00:00Z",
        name="Erling Haaland", position="ST", team="Manchester City", overall_rating=91,
        nationality="Norway", photo="/haaland-football-player.jpg", age=24, active=True,
    ),
    {
        "id": "item_c1",
        "collection_id": "col_cards",
        "data": {
            "card_name": "TOTY Messi",
            "player": "Lionel Messi",
            "card_type": "Team of the Year",
            "rating": 98,
            "card_image": "/toty-messi-football-card.jpg",
            "release_date": "2024-01-20",
            "is_special": True,
            "price": 5000000,
        },
        "created_at": "2024-02-10T10:00:00Z",
    },
    {
        "id": "item_c2",
        "collection_id": "col_cards",
        "data": {
            "card_name": "TOTS Haaland",
            "player": "Erling Haaland",
            "card_type": "Team of the Season",
            "rating": 99,
            "card_image": "/tots-haaland-football-card.jpg",
            "release_date": "2024-05-15",
            "is_special": True,
            "price": 8000000,
        },
        "created_at": "2024-02-11T10:00:00Z",
    },
    {
        "id": "item_c3",
        "collection_id": "col_cards",
        "data": {
            "card_name": "Icon Ronaldo",
            "player": "Cristiano Ronaldo",
            "card_type": "Icon",
            "rating": 95,
            "card_image": "/icon-ronaldo-football-card.jpg",
            "release_date": "2024-03-10",
            "is_special": True,
            "price": 3500000,
        },
        "created_at": "2024-02-12T10:00:00Z",
    },
    {
        "id": "item_r1",
        "collection_id": "col_renders",
        "data": {
            "title": "Messi Celebration",
            "player": "Lionel Messi",
            "image_url": "/messi-celebration-render.jpg",
            "category": "Celebrations",
            "description": "<p>Iconic Messi celebration render with arms wide open</p>",
            "is_featured": True,
        },
        "created_at": "2024-03-05T10:00:00Z",
    },
    {
        "id": "item_r2",
        "collection_id": "col_renders",
        "data": {
            "title": "Haaland Goal",
            "player": "Erling Haaland",
            "image_url": "/haaland-goal-celebration-render.jpg",
            "category": "Goals",
            "description": "<p>Haaland meditation celebration render</p>",
            "is_featured": True,
        },
        "created_at": "2024-03-06T10:00:00Z",
    },
    _review(
        "item_pr1", "2024-04-20T10:00:00Z", [95, 88, 96, 97, 40, 75],
        ownerId="user_123", playerName="Lionel Messi", eventName="Champions League Final",
        pros="Incredible dribbling, vision, and playmaking ability",
        cons="Slightly reduced pace compared to prime years",
        verdict="Still the GOAT - unmatched football IQ and technical ability",
        rating=9.5, partnerName="FC Barcelona", pos="RW",
        urlSlugCopy="messi-champions-league-final-review",
    ),
    _review(
        "item_pr2", "2024-04-21T10:00:00Z", [92, 96, 70, 82, 45, 95],
        ownerId="user_456", playerName="Erling Haaland", eventName="Premier League Season",
        pros="Unstoppable in front of goal, incredible positioning",
        cons="Limited playmaking, needs service from teammates",
        verdict="Pure goal machine - one of the best strikers in the world",
        rating=9.0, partnerName="Manchester City", pos="ST",
        urlSlugCopy="haaland-premier-league-season-review",
    ),
    _review(
        "item_pr3", "2024-04-22T10:00:00Z", [98, 92, 85, 94, 38, 80],
        ownerId="user_789", playerName="Kylian Mbappe", eventName="World Cup 2022",
        pros="Lightning speed, clinical finishing, excellent dribbling",
        cons="Can be inconsistent in big games",
        verdict="Future GOAT candidate - incredible talent and potential",
        rating=9.2, partnerName="PSG", pos="LW",
        urlSlugCopy="mbappe-world-cup-2022-review",
    ),
]
