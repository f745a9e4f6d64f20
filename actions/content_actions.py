"""Admin actions for the home page sections."""
from forms.admin_forms import IdForm, SectionSettingsForm
from forms.common import SchemaForm
from forms.content_forms import (AboutForm, CertificationForm, EducationForm, ExperienceForm,
                                 HeroForm, SkillCategoryForm)
from models.about import About
from models.career import Education, Experience
from models.certification import Certification
from models.hero import Hero
from models.section import SectionSettings
from models.skill import SkillCategory
from secure_action import (ADMIN_ROLES, SUPER_ROLES, ActionError, create_secure_action,
                           secure_action)


def update_hero(payload, locale):
    def run(data, ctx):
        Hero.save(locale, data)
        return Hero.get(locale)

    return create_secure_action(payload, HeroForm, ADMIN_ROLES, run, name="UPDATE_HERO")


@secure_action(SchemaForm, SUPER_ROLES, name="DELETE_HERO")
def delete_hero(data, ctx):
    return {"deleted_count": Hero.delete()}


def update_about(payload, locale):
    def run(data, ctx):
        About.save(locale, data)
        return About.get(locale)

    return create_secure_action(payload, AboutForm, ADMIN_ROLES, run, name="UPDATE_ABOUT")


def _upsert(model, form, name, payload, locale, entry_id, missing):
    def run(data, ctx):
        if entry_id and not model.exists(entry_id):
            raise ActionError(missing, 404)
        saved_id = model.save(locale, data, entry_id)
        return {"id": saved_id}

    return create_secure_action(payload, form, ADMIN_ROLES, run, name=name)


def _deleter(model, name, missing):
    @secure_action(IdForm, SUPER_ROLES, name=name)
    def delete(data, ctx):
        if not model.delete(data["id"]):
            raise ActionError(missing, 404)
        return {"deleted_count": 1}

    return delete


def upsert_skill_category(payload, locale, category_id=None):
    return _upsert(SkillCategory, SkillCategoryForm, "UPSERT_SKILL_CATEGORY", payload,
                   locale, category_id, "Skill category not found")


def upsert_experience(payload, locale, experience_id=None):
    return _upsert(Experience, ExperienceForm, "UPSERT_EXPERIENCE", payload, locale,
                   experience_id, "Experience not found")


def upsert_education(payload, locale, education_id=None):
    return _upsert(Education, EducationForm, "UPSERT_EDUCATION", payload, locale,
                   education_id, "Education not found")


def upsert_certification(payload, locale, certification_id=None):
    return _upsert(Certification, CertificationForm, "UPSERT_CERTIFICATION", payload,
                   locale, certification_id, "Certification not found")


delete_skill_category = _deleter(SkillCategory, "DELETE_SKILL_CATEGORY",
                                 "Skill category not found")
delete_experience = _deleter(Experience, "DELETE_EXPERIENCE", "Experience not found")
delete_education = _deleter(Education, "DELETE_EDUCATION", "Education not found")
delete_certification = _deleter(Certification, "DELETE_CERTIFICATION",
                                "Certification not found")


@secure_action(SectionSettingsForm, ADMIN_ROLES, name="UPDATE_SECTIONS")
def update_sections(data, ctx):
    return SectionSettings.save(data)
