# backend/petcare/db/models/__init__.py

from petcare.db.models.user import User
from petcare.db.models.pet import Pet

from petcare.db.models.vaccine_record import VaccineRecord
from petcare.db.models.medical_checkup import MedicalCheckup
from petcare.db.models.allergy_record import AllergyRecord
from petcare.db.models.feeding_plan import FeedingPlan
from petcare.db.models.exercise_record import ExerciseRecord
from petcare.db.models.habit_entry import HabitEntry
from petcare.db.models.feeding_reminder import FeedingReminder

from petcare.db.models.community_post import CommunityPost
from petcare.db.models.post_like import PostLike
from petcare.db.models.post_comment import PostComment
from petcare.db.models.community_question import CommunityQuestion
from petcare.db.models.community_answer import CommunityAnswer
