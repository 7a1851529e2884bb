from __future__ import annotations

from flask import Flask, jsonify

from ..common.web import admin_required, api_errors, json_body, login_required
from ..container import Container
from .model import Lesson, LessonProgress


def to_json(lesson: Lesson) -> dict:
    return {
        "id": lesson.lesson_id,
        "title": lesson.title,
        "description": lesson.description,
        "videoUrl": lesson.video_url,
        "orderIndex": lesson.order_index,
        "createdAt": lesson.created_at,
    }


def progress_to_json(p: LessonProgress) -> dict:
    out = {"id": p.progress_id, "lessonId": p.lesson_id, "designerId": p.designer_id, "viewed": p.viewed}
    if p.viewed_at is not None:
        out["viewedAt"] = p.viewed_at
    return out


def register(app: Flask, container: Container) -> None:
    service = container.lesson_service

    @app.route("/api/lessons", methods=["GET"], endpoint="lessons_list")
    @api_errors("Erro ao buscar aulas")
    def list_lessons():
        return jsonify([to_json(l) for l in service.list_lessons()])

    @app.route("/api/lessons", methods=["POST"], endpoint="lessons_create")
    @admin_required
    @api_errors("Erro ao criar aula")
    def create_lesson():
        data = json_body()
        lesson = service.create(
            title=data.get("title") or "",
            description=data.get("description"),
            video_url=data.get("videoUrl") or "",
        )
        return jsonify(to_json(lesson))

    @app.route("/api/lessons/<lesson_id>", methods=["PUT"], endpoint="lessons_update")
    @admin_required
    @api_errors("Erro ao atualizar aula")
    def update_lesson(lesson_id: str):
        data = json_body()
        lesson = service.update(
            lesson_id,
            title=data.get("title"),
            description=data.get("description"),
            video_url=data.get("videoUrl"),
            order_index=data.get("orderIndex"),
        )
        return jsonify(to_json(lesson))

    @app.route("/api/lessons/<lesson_id>", methods=["DELETE"], endpoint="lessons_delete")
    @admin_required
    @api_errors("Erro ao remover aula")
    def delete_lesson(lesson_id: str):
        service.delete(lesson_id)
        return jsonify({"success": True})

    @app.route("/api/lesson-progress/<designer_id>", methods=["GET"], endpoint="lesson_progress_list")
    @api_errors("Erro ao buscar progresso")
    def list_progress(designer_id: str):
        return jsonify([progress_to_json(p) for p in service.progress_for(designer_id)])

    @app.route("/api/lesson-progress", methods=["POST"], endpoint="lesson_progress_mark")
    @login_required
    @api_errors("Erro ao salvar progresso")
    def mark_viewed():
        data = json_body()
        progress = service.mark_viewed(
            lesson_id=data.get("lessonId") or "",
            designer_id=data.get("designerId") or "",
        )
        return jsonify(progress_to_json(progress))
