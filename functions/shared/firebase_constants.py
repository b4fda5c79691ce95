# Copyright 2025 Google LLC
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
# ==============================================================================


"""Firestore collection names shared by the callable and REST surfaces."""

BLOG_POSTS_COLLECTION = "blog_posts"
CASE_STUDIES_COLLECTION = "case_studies"
CASE_STUDY_SECTIONS_COLLECTION = "case_study_sections"
CASE_STUDY_METRICS_COLLECTION = "case_study_metrics"

PROFILE_COLLECTION = "profile"
PROFILE_DOC_ID = "main"
WORK_EXPERIENCES_COLLECTION = "work_experiences"
EDUCATION_COLLECTION = "education"
SKILLS_COLLECTION = "skills"

CONTACT_SUBMISSIONS_COLLECTION = "contact_submissions"
USERS_COLLECTION = "users"
IMAGES_COLLECTION = "images"

# Storage metadata key read by the Firebase console/SDKs for download URLs.
DOWNLOAD_TOKENS_METADATA_KEY = "firebaseStorageDownloadTokens"
