from flask import Blueprint, current_app, flash, g, redirect, render_template, request, url_for
from flask_login import current_user

from actions import auth_actions
from forms.auth_forms import SignInForm, SignUpForm
from translations import get_translator

auth_bp = Blueprint("auth", __name__)


@auth_bp.route("/sign-in", methods=["GET", "POST"])
def sign_in():
    if current_user.is_authenticated:
        return redirect(auth_actions.redirect_target(current_user))

    t = get_translator(g.locale)
    next_url = request.args.get("next")
    if request.method == "POST":
        result = auth_actions.login(request.form, next_url=next_url)
        if result.success:
            return redirect(result.data["redirect"])
        flash(t(result.error), "danger")
        return render_template("auth/sign_in.html", form=result.form,
                               next_url=next_url), result.status
    return render_template("auth/sign_in.html", form=SignInForm(), next_url=next_url)


@auth_bp.route("/sign-up", methods=["GET", "POST"])
def sign_up():
    if current_user.is_authenticated:
        return redirect(url_for("public.home"))

    t = get_translator(g.locale)
    if request.method == "POST":
        result = auth_actions.register(request.form)
        if result.success:
            if current_app.config["REQUIRE_EMAIL_VERIFICATION"]:
                flash(t("flash_register_success"), "success")
            else:
                flash(t("flash_register_success_verified"), "success")
            return redirect(url_for("auth.sign_in"))
        flash(t(result.error), "danger")
        return render_template("auth/sign_up.html", form=result.form), result.status
    return render_template("auth/sign_up.html", form=SignUpForm())


@auth_bp.route("/sign-out", methods=["POST"])
def sign_out():
    t = get_translator(g.locale)
    auth_actions.logout()
    flash(t("flash_logged_out"), "info")
    return redirect(url_for("auth.sign_in"))
