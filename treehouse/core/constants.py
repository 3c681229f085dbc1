"""Global constants for the treehouse application."""

# Collection names
USERS_COLLECTION = "users"
GROUPS_SUBCOLLECTION = "groups"
PICTURES_SUBCOLLECTION = "Picture"

# Storage paths
PICTURES_BLOB_PREFIX = "pictures"
PROFILE_IMAGES_BLOB_PREFIX = "profile_images"
IMAGE_CONTENT_TYPE = "image/jpeg"

# Fields on 'users/{uid}'
USER_UID = "uid"
USER_EMAIL = "email"
USER_USERNAME = "username"
USER_PROFILE_IMAGE_URL = "profileImageURL"

# Fields on 'users/{uid}/groups/{groupId}'
GROUP_NAME = "groupName"
GROUP_MEMBERS = "members"
GROUP_MEMBERS_UID = "membersUID"
GROUP_IMAGE_URL = "groupImageURL"
GROUP_POSTED_UIDS = "postedUIDs"
GROUP_CREATED_BY = "createdBy"
GROUP_TIMESTAMP = "timestamp"

# Fields on 'users/{uid}/Picture/{autoId}'
PICTURE_IMAGE_URL = "imageURL"
PICTURE_GROUP_ID = "groupId"
PICTURE_TIMESTAMP = "timestamp"

# Group-related constants
MAX_INVITEES = 5
USERNAME_MAX_LENGTH = 15

# Image-related constants
PROFILE_IMAGE_QUALITY = 80
# Captured stills are stored as-is, so only JPEG is accepted.
PHOTO_EXTENSIONS = ["jpg", "jpeg"]
# Profile photos are re-encoded by Pillow.
PROFILE_IMAGE_EXTENSIONS = ["jpg", "jpeg", "png"]
