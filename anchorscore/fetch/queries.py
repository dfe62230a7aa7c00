"""GraphQL documents sent to AniList."""

MEDIA_LIST_COLLECTION_QUERY = """
query ($userName: String, $type: MediaType) {
  MediaListCollection(userName: $userName, type: $type) {
    lists {
      name
      entries {
        repeat
        score(format: POINT_10_DECIMAL)
        media {
          id
          title {
            romaji
            english
          }
          coverImage {
            medium
          }
          meanScore
        }
      }
    }
  }
}
"""
