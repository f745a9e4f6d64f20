LOCALES = ("en", "ar")
DEFAULT_LOCALE = "en"
RTL_LOCALES = {"ar"}

TRANSLATIONS = {
    "en": {
        # App title / brand
        "app_title": "Portfolio",
        "brand": "Portfolio",
        "language_toggle": "العربية",

        # Navbar
        "nav_home": "Home",
        "nav_projects": "Projects",
        "nav_blogs": "Blog",
        "nav_testimonial": "Leave a testimonial",
        "nav_dashboard": "Dashboard",
        "nav_login": "Sign in",
        "nav_register": "Sign up",
        "nav_logout": "Sign out",

        # Home sections
        "section_about": "About",
        "section_skills": "Skills",
        "section_experience": "Experience",
        "section_education": "Education",
        "section_certifications": "Certifications",
        "section_projects": "Projects",
        "section_blogs": "Latest posts",
        "section_testimonials": "Testimonials",
        "section_contact": "Contact",
        "availability_AVAILABLE": "Available for work",
        "availability_BUSY": "Busy",
        "availability_NOT_AVAILABLE": "Not available",
        "download_resume": "Download resume",
        "present": "Present",
        "view_project": "View project",
        "live_demo": "Live demo",
        "source_code": "Source code",
        "read_more": "Read more",
        "reading_time": "{minutes} min read",
        "published_on": "Published {date}",
        "no_projects": "No projects yet.",
        "no_blogs": "No posts yet.",
        "all_categories": "All",

        # Auth
        "sign_in_title": "Sign in",
        "sign_up_title": "Create an account",
        "label_name": "Name",
        "label_email": "Email",
        "label_password": "Password",
        "label_accept_terms": "I accept the terms and conditions",
        "btn_sign_in": "Sign in",
        "btn_sign_up": "Sign up",
        "no_account": "Don't have an account?",
        "have_account": "Already have an account?",
        "login_required": "Please sign in to access this page.",
        "Invalid credentials!": "Invalid credentials!",
        "Email already in use!": "Email already in use!",
        "Account access restricted.": "Account access restricted.",
        "email_not_verified": "Your email address has not been verified yet.",
        "flash_register_success": "Account created. You can sign in once your email is verified.",
        "flash_register_success_verified": "Account created. Please sign in.",
        "flash_logged_out": "You have been signed out.",

        # Contact / testimonials
        "contact_title": "Get in touch",
        "label_subject": "Subject",
        "label_message": "Message",
        "btn_send": "Send message",
        "flash_message_sent": "Thanks! Your message has been sent.",
        "testimonial_title": "Share your experience",
        "label_client_title": "Your title",
        "label_role": "Role",
        "label_content": "Testimonial",
        "label_rating": "Rating",
        "flash_testimonial_sent": "Thank you! Your testimonial is awaiting review.",

        # Admin
        "admin_title": "Dashboard",
        "admin_overview": "Overview",
        "admin_hero": "Hero",
        "admin_about": "About",
        "admin_skills": "Skills",
        "admin_experience": "Experience",
        "admin_education": "Education",
        "admin_certifications": "Certifications",
        "admin_projects": "Projects",
        "admin_blogs": "Blog",
        "admin_testimonials": "Testimonials",
        "admin_messages": "Messages",
        "admin_sections": "Sections",
        "admin_users": "Users",
        "admin_profile": "Profile",
        "admin_audit_log": "Audit log",
        "stat_projects": "Projects",
        "stat_unread_messages": "Unread messages",
        "stat_published_blogs": "Published posts",
        "stat_pending_testimonials": "Pending testimonials",
        "stat_users": "Users",
        "stat_actions_today": "Actions today",
        "recent_activity": "Recent activity",
        "content_locale": "Content language",
        "btn_save": "Save",
        "btn_new": "New",
        "btn_edit": "Edit",
        "btn_delete": "Delete",
        "btn_filter": "Filter",
        "btn_delete_selected": "Delete selected",
        "confirm_delete": "Delete this item?",
        "nothing_here": "Nothing here yet.",
        "th_title": "Title",
        "th_status": "Status",
        "th_date": "Date",
        "th_actions": "Actions",
        "th_user": "User",
        "th_action": "Action",
        "th_details": "Details",
        "th_ip": "IP address",
        "th_role": "Role",
        "th_verified": "Verified",
        "msg_ARCHIVE": "Archive",
        "msg_SPAM": "Spam",
        "msg_TOGGLE_READ": "Read/Unread",
        "msg_TOGGLE_STAR": "Star",
        "msg_REPLIED": "Mark replied",
        "msg_DELETE": "Delete",
        "flash_saved": "Changes saved.",
        "flash_deleted": "Deleted.",
        "pagination_previous": "Previous",
        "pagination_next": "Next",

        # Action errors
        "VALIDATION_ERROR": "Please correct the highlighted fields.",
        "UNAUTHORIZED": "Please sign in to continue.",
        "USER_NOT_FOUND": "Your account could not be found.",
        "USER_SUSPENDED": "Your account is suspended.",
        "USER_BANNED": "Your account is banned.",
        "USER_DELETED": "Your account has been deleted.",
        "FORBIDDEN": "You do not have permission to do that.",
        "INVALID_SYSTEM_KEY": "Invalid system key.",
        "CONFLICT": "This conflicts with existing data.",
        "INTERNAL_ERROR": "Something went wrong. Please try again.",

        # Error pages
        "error_403": "You do not have access to this page.",
        "error_404": "The page you are looking for does not exist.",
        "error_413": "The uploaded file is too large.",
        "error_500": "An unexpected error occurred.",
        "back_home": "Back to home",
    },
    "ar": {
        "app_title": "معرض الأعمال",
        "brand": "معرض الأعمال",
        "language_toggle": "English",

        "nav_home": "الرئيسية",
        "nav_projects": "المشاريع",
        "nav_blogs": "المدونة",
        "nav_testimonial": "أضف شهادة",
        "nav_dashboard": "لوحة التحكم",
        "nav_login": "تسجيل الدخول",
        "nav_register": "إنشاء حساب",
        "nav_logout": "تسجيل الخروج",

        "section_about": "نبذة",
        "section_skills": "المهارات",
        "section_experience": "الخبرات",
        "section_education": "التعليم",
        "section_certifications": "الشهادات",
        "section_projects": "المشاريع",
        "section_blogs": "أحدث المقالات",
        "section_testimonials": "آراء العملاء",
        "section_contact": "تواصل",
        "availability_AVAILABLE": "متاح للعمل",
        "availability_BUSY": "مشغول",
        "availability_NOT_AVAILABLE": "غير متاح",
        "download_resume": "تحميل السيرة الذاتية",
        "present": "حتى الآن",
        "view_project": "عرض المشروع",
        "live_demo": "عرض مباشر",
        "source_code": "الشيفرة المصدرية",
        "read_more": "اقرأ المزيد",
        "reading_time": "{minutes} دقيقة قراءة",
        "published_on": "نُشر في {date}",
        "no_projects": "لا توجد مشاريع بعد.",
        "no_blogs": "لا توجد مقالات بعد.",
        "all_categories": "الكل",

        "sign_in_title": "تسجيل الدخول",
        "sign_up_title": "إنشاء حساب",
        "label_name": "الاسم",
        "label_email": "البريد الإلكتروني",
        "label_password": "كلمة المرور",
        "label_accept_terms": "أوافق على الشروط والأحكام",
        "btn_sign_in": "دخول",
        "btn_sign_up": "تسجيل",
        "no_account": "ليس لديك حساب؟",
        "have_account": "لديك حساب بالفعل؟",
        "login_required": "يرجى تسجيل الدخول للوصول إلى هذه الصفحة.",
        "Invalid credentials!": "بيانات الدخول غير صحيحة!",
        "Email already in use!": "البريد الإلكتروني مستخدم بالفعل!",
        "Account access restricted.": "تم تقييد الوصول إلى الحساب.",
        "email_not_verified": "لم يتم التحقق من بريدك الإلكتروني بعد.",
        "flash_register_success": "تم إنشاء الحساب. يمكنك تسجيل الدخول بعد التحقق من بريدك.",
        "flash_register_success_verified": "تم إنشاء الحساب. يرجى تسجيل الدخول.",
        "flash_logged_out": "تم تسجيل خروجك.",

        "contact_title": "تواصل معي",
        "label_subject": "الموضوع",
        "label_message": "الرسالة",
        "btn_send": "إرسال",
        "flash_message_sent": "شكراً! تم إرسال رسالتك.",
        "testimonial_title": "شاركنا تجربتك",
        "label_client_title": "المسمى الوظيفي",
        "label_role": "الدور",
        "label_content": "الشهادة",
        "label_rating": "التقييم",
        "flash_testimonial_sent": "شكراً لك! شهادتك بانتظار المراجعة.",

        "admin_title": "لوحة التحكم",
        "admin_overview": "نظرة عامة",
        "admin_hero": "الواجهة",
        "admin_about": "نبذة",
        "admin_skills": "المهارات",
        "admin_experience": "الخبرات",
        "admin_education": "التعليم",
        "admin_certifications": "الشهادات",
        "admin_projects": "المشاريع",
        "admin_blogs": "المدونة",
        "admin_testimonials": "الشهادات",
        "admin_messages": "الرسائل",
        "admin_sections": "الأقسام",
        "admin_users": "المستخدمون",
        "admin_profile": "الملف الشخصي",
        "admin_audit_log": "سجل التدقيق",
        "stat_projects": "المشاريع",
        "stat_unread_messages": "رسائل غير مقروءة",
        "stat_published_blogs": "مقالات منشورة",
        "stat_pending_testimonials": "شهادات معلقة",
        "stat_users": "المستخدمون",
        "stat_actions_today": "إجراءات اليوم",
        "recent_activity": "النشاط الأخير",
        "content_locale": "لغة المحتوى",
        "btn_save": "حفظ",
        "btn_new": "جديد",
        "btn_edit": "تعديل",
        "btn_delete": "حذف",
        "btn_filter": "تصفية",
        "btn_delete_selected": "حذف المحدد",
        "confirm_delete": "حذف هذا العنصر؟",
        "nothing_here": "لا يوجد شيء هنا بعد.",
        "th_title": "العنوان",
        "th_status": "الحالة",
        "th_date": "التاريخ",
        "th_actions": "الإجراءات",
        "th_user": "المستخدم",
        "th_action": "الإجراء",
        "th_details": "التفاصيل",
        "th_ip": "عنوان IP",
        "th_role": "الدور",
        "th_verified": "موثق",
        "msg_ARCHIVE": "أرشفة",
        "msg_SPAM": "مزعج",
        "msg_TOGGLE_READ": "مقروء/غير مقروء",
        "msg_TOGGLE_STAR": "تمييز",
        "msg_REPLIED": "تم الرد",
        "msg_DELETE": "حذف",
        "flash_saved": "تم حفظ التغييرات.",
        "flash_deleted": "تم الحذف.",
        "pagination_previous": "السابق",
        "pagination_next": "التالي",

        "VALIDATION_ERROR": "يرجى تصحيح الحقول المحددة.",
        "UNAUTHORIZED": "يرجى تسجيل الدخول للمتابعة.",
        "USER_NOT_FOUND": "تعذر العثور على حسابك.",
        "USER_SUSPENDED": "حسابك موقوف.",
        "USER_BANNED": "حسابك محظور.",
        "USER_DELETED": "تم حذف حسابك.",
        "FORBIDDEN": "ليست لديك صلاحية للقيام بذلك.",
        "INVALID_SYSTEM_KEY": "مفتاح النظام غير صالح.",
        "CONFLICT": "يتعارض هذا مع بيانات موجودة.",
        "INTERNAL_ERROR": "حدث خطأ ما. يرجى المحاولة مرة أخرى.",

        "error_403": "ليس لديك صلاحية الوصول إلى هذه الصفحة.",
        "error_404": "الصفحة التي تبحث عنها غير موجودة.",
        "error_413": "الملف المرفوع كبير جداً.",
        "error_500": "حدث خطأ غير متوقع.",
        "back_home": "العودة إلى الرئيسية",
    },
}


def get_translator(lang=DEFAULT_LOCALE):
    """Return a translation function for the given language."""
    strings = TRANSLATIONS.get(lang, TRANSLATIONS[DEFAULT_LOCALE])
    fallback = TRANSLATIONS[DEFAULT_LOCALE]

    def t(key, **kwargs):
        text = strings.get(key, fallback.get(key, key))
        if kwargs:
            text = text.format(**kwargs)
        return text

    return t


def resolve_locale(candidate):
    """Return ``candidate`` if it is a supported locale, else the default."""
    if candidate in LOCALES:
        return candidate
    return DEFAULT_LOCALE


def text_direction(locale):
    return "rtl" if locale in RTL_LOCALES else "ltr"


def swap_locale(path, locale):
    """Replace the leading locale segment of ``path`` with ``locale``.

    Paths without a locale segment get one inserted:
    ``/en/projects`` -> ``/ar/projects``, ``/projects`` -> ``/ar/projects``.
    """
    path = path or "/"
    if not path.startswith("/"):
        path = "/" + path
    segments = path.split("/")
    # segments[0] is always "" for an absolute path
    if len(segments) > 1 and segments[1] in LOCALES:
        segments[1] = locale
    else:
        segments.insert(1, locale)
    return "/".join(segments)
