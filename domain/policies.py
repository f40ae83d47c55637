# policies.py
# Order matters: highest tier first. Ids are what frontmatter `tier:` refers to.
PATREON_TIERS = [
    {
        "id": "eclipse-enigma",
        "name": "Eclipse Enigma",
        "minimum_pledge_cents": 5000,  # $50/month
        "benefits": [
            "Access to all premium content",
            "Access to ultimate-tier exclusive posts",
            "Early access to new features",
            "Direct support channel",
        ],
        "color": "purple",
    },
    {
        "id": "vortex-vanguard",
        "name": "Vortex Vanguard",
        "minimum_pledge_cents": 2500,  # $25/month
        "benefits": [
            "Access to premium content",
            "Access to premium-tier exclusive posts",
            "Behind-the-scenes updates",
        ],
        "color": "blue",
    },
    {
        "id": "nebula-nomad",
        "name": "Nebula Nomad",
        "minimum_pledge_cents": 1300,  # $13/month
        "benefits": [
            "Access to basic tier content",
            "Support the work",
            "Early access to some posts",
        ],
        "color": "green",
    },
]

ACTIVE_PATRON_STATUS = "active_patron"

# preview length for gated posts (characters of markdown source)
PREVIEW_CHARS = 600
