"""GROQ queries sent to the content store."""

STARTUP_CARD_PROJECTION = """
  _id,
  title,
  slug,
  _createdAt,
  author -> {
    _id, name, username, image, bio
  },
  views,
  description,
  category,
  image
"""

STARTUPS_QUERY = f"""
*[_type == "startup" && defined(slug.current) && (
  !defined($search) || title match $search || category match $search || author->name match $search
)] | order(_createdAt desc) {{
{STARTUP_CARD_PROJECTION}
}}
"""

STARTUP_BY_ID_QUERY = """
*[_type == "startup" && _id == $id][0] {
  _id,
  title,
  slug,
  _createdAt,
  author -> {
    _id, name, username, image, bio
  },
  views,
  description,
  category,
  image,
  pitch
}
"""

STARTUP_VIEWS_QUERY = """
*[_type == "startup" && _id == $id][0] {
  _id, views
}
"""

AUTHOR_BY_ID_QUERY = """
*[_type == "author" && _id == $id][0] {
  _id,
  id,
  name,
  username,
  email,
  image,
  bio
}
"""

STARTUPS_BY_AUTHOR_QUERY = f"""
*[_type == "startup" && author._ref == $id] | order(_createdAt desc) {{
{STARTUP_CARD_PROJECTION}
}}
"""

PLAYLIST_BY_SLUG_QUERY = f"""
*[_type == "playlist" && slug.current == $slug][0] {{
  _id,
  title,
  slug,
  select[] -> {{
{STARTUP_CARD_PROJECTION},
    pitch
  }}
}}
"""
