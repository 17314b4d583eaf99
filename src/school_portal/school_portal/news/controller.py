from __future__ import annotations

from flask import Flask, jsonify, request, send_from_directory

from ..common.auth import caller_required, current_caller
from ..common.http import json_body
from ..container import Container


def register(app: Flask, container: Container) -> None:
    login_required = caller_required(container.auth_service)

    @app.route("/public/news", methods=["GET"], endpoint="public_news")
    def public_news():
        posts = container.news_service.list_public(department=request.args.get("dept"))
        return jsonify([p.to_dict() for p in posts])

    @app.route("/staff/my-news", methods=["GET"], endpoint="staff_my_news")
    @login_required
    def staff_my_news():
        posts = container.news_service.list_own(current_caller())
        return jsonify([p.to_dict() for p in posts])

    @app.route("/staff/news", methods=["POST"], endpoint="create_news")
    @login_required
    def create_news():
        # Multipart form (with optional image) or plain JSON.
        data = request.form if request.form else json_body()
        post = container.news_service.create(
            current_caller(),
            title=data.get("title", ""),
            content=data.get("content", ""),
            image=request.files.get("image"),
        )
        return jsonify(post.to_dict())

    @app.route("/staff/news/<int:news_id>", methods=["DELETE"], endpoint="delete_news")
    @login_required
    def delete_news(news_id: int):
        container.news_service.delete(current_caller(), news_id)
        return jsonify({"ok": True})

    @app.route("/uploads/<path:filename>", methods=["GET"], endpoint="uploads")
    def uploads(filename: str):
        return send_from_directory(app.config["UPLOAD_FOLDER"], filename)
