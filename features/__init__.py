"""Feature packages of the HMRC manuals API."""
