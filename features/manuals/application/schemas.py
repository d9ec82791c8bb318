"""Structural schemas for incoming manuals and sections."""

from marshmallow import INCLUDE, Schema, fields, validate


class _DocumentSchema(Schema):
    """Unknown properties are passed through to the content item."""

    class Meta:
        unknown = INCLUDE


class ChildSectionSchema(_DocumentSchema):
    section_id = fields.String(required=True, validate=validate.Length(min=1))
    title = fields.String(required=True)
    description = fields.String()


class ChildSectionGroupSchema(_DocumentSchema):
    title = fields.String()
    child_sections = fields.List(fields.Nested(ChildSectionSchema), required=True)


class ChangeNoteSchema(_DocumentSchema):
    section_id = fields.String()
    title = fields.String()
    change_note = fields.String(required=True)
    published_at = fields.DateTime()


class BreadcrumbSchema(_DocumentSchema):
    section_id = fields.String(required=True, validate=validate.Length(min=1))


class ManualDetailsSchema(_DocumentSchema):
    child_section_groups = fields.List(fields.Nested(ChildSectionGroupSchema))
    change_notes = fields.List(fields.Nested(ChangeNoteSchema))


class SectionDetailsSchema(_DocumentSchema):
    section_id = fields.String(required=True, validate=validate.Length(min=1))
    body = fields.String()
    child_section_groups = fields.List(fields.Nested(ChildSectionGroupSchema))
    breadcrumbs = fields.List(fields.Nested(BreadcrumbSchema))


class _PublishableSchema(_DocumentSchema):
    title = fields.String(required=True, validate=validate.Length(min=1))
    public_updated_at = fields.DateTime()
    update_type = fields.String(validate=validate.OneOf(["major", "minor"]))


class ManualSchema(_PublishableSchema):
    """Manual payload accepted by ``PUT /hmrc-manuals/<slug>``."""

    description = fields.String(required=True)
    details = fields.Nested(ManualDetailsSchema)


class SectionSchema(_PublishableSchema):
    """Section payload accepted by ``PUT /hmrc-manuals/<slug>/sections/<section_slug>``."""

    description = fields.String()
    details = fields.Nested(SectionDetailsSchema, required=True)
