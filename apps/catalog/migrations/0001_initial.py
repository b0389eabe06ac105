# Generated manually

from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion
import django.utils.timezone
import simple_history.models


def from_date_field():
    return models.DateTimeField(
        db_index=True, default=django.utils.timezone.now, verbose_name='Válido desde'
    )


def thru_date_field():
    return models.DateTimeField(blank=True, db_index=True, null=True, verbose_name='Válido até')


def id_field():
    return models.BigAutoField(
        auto_created=True, primary_key=True, serialize=False, verbose_name='ID'
    )


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Category',
            fields=[
                ('id', id_field()),
                ('name', models.CharField(max_length=200, verbose_name='Nome')),
                ('slug', models.SlugField(max_length=200, unique=True, verbose_name='Slug')),
                ('description', models.TextField(blank=True, verbose_name='Descrição')),
                ('is_active', models.BooleanField(default=True, verbose_name='Ativo')),
                ('display_order', models.PositiveIntegerField(default=0, verbose_name='Ordem de exibição')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'verbose_name': 'Categoria',
                'verbose_name_plural': 'Categorias',
                'ordering': ['display_order', 'name'],
            },
        ),
        migrations.CreateModel(
            name='FeatureType',
            fields=[
                ('id', id_field()),
                ('name', models.CharField(max_length=100, verbose_name='Nome')),
                ('slug', models.SlugField(max_length=100, unique=True, verbose_name='Slug')),
                ('display_order', models.PositiveIntegerField(default=0, verbose_name='Ordem de exibição')),
            ],
            options={
                'verbose_name': 'Tipo de Característica',
                'verbose_name_plural': 'Tipos de Características',
                'ordering': ['display_order', 'name'],
            },
        ),
        migrations.CreateModel(
            name='Product',
            fields=[
                ('id', id_field()),
                ('internal_name', models.CharField(blank=True, max_length=255, verbose_name='Nome interno')),
                ('name', models.CharField(blank=True, max_length=255, verbose_name='Nome')),
                ('slug', models.SlugField(max_length=255, unique=True, verbose_name='Slug')),
                ('description', models.TextField(blank=True, verbose_name='Descrição')),
                ('long_description', models.TextField(blank=True, verbose_name='Descrição longa')),
                ('is_virtual', models.BooleanField(default=False, verbose_name='Virtual')),
                ('is_variant', models.BooleanField(default=False, verbose_name='Variante')),
                ('introduction_date', models.DateTimeField(blank=True, null=True, verbose_name='Data de introdução')),
                ('sales_discontinuation_date', models.DateTimeField(blank=True, db_index=True, null=True, verbose_name='Data de descontinuação de venda')),
                ('small_image_url', models.CharField(blank=True, max_length=2000, null=True)),
                ('medium_image_url', models.CharField(blank=True, max_length=2000, null=True)),
                ('large_image_url', models.CharField(blank=True, max_length=2000, null=True)),
                ('detail_image_url', models.CharField(blank=True, max_length=2000, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='Criado em')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='Atualizado em')),
            ],
            options={
                'verbose_name': 'Produto',
                'verbose_name_plural': 'Produtos',
                'ordering': ['internal_name', 'pk'],
            },
        ),
        migrations.CreateModel(
            name='Feature',
            fields=[
                ('id', id_field()),
                ('description', models.CharField(max_length=255, verbose_name='Descrição')),
                ('abbreviation', models.CharField(blank=True, max_length=20, verbose_name='Abreviação')),
                ('feature_type', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='features', to='catalog.featuretype', verbose_name='Tipo de Característica')),
            ],
            options={
                'verbose_name': 'Característica',
                'verbose_name_plural': 'Características',
                'ordering': ['feature_type', 'description'],
                'unique_together': {('feature_type', 'description')},
            },
        ),
        migrations.CreateModel(
            name='CategoryRollup',
            fields=[
                ('id', id_field()),
                ('from_date', from_date_field()),
                ('thru_date', thru_date_field()),
                ('sequence_num', models.IntegerField(blank=True, null=True)),
                ('child', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='parent_rollups', to='catalog.category', verbose_name='Categoria Filha')),
                ('parent', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='child_rollups', to='catalog.category', verbose_name='Categoria Pai')),
            ],
            options={
                'verbose_name': 'Hierarquia de Categoria',
                'verbose_name_plural': 'Hierarquias de Categorias',
                'ordering': ['parent', 'sequence_num'],
                'unique_together': {('parent', 'child', 'from_date')},
            },
        ),
        migrations.CreateModel(
            name='CategoryMembership',
            fields=[
                ('id', id_field()),
                ('from_date', from_date_field()),
                ('thru_date', thru_date_field()),
                ('sequence_num', models.IntegerField(blank=True, null=True)),
                ('comments', models.CharField(blank=True, max_length=255)),
                ('category', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='memberships', to='catalog.category', verbose_name='Categoria')),
                ('product', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='category_memberships', to='catalog.product', verbose_name='Produto')),
            ],
            options={
                'verbose_name': 'Membro da Categoria',
                'verbose_name_plural': 'Membros da Categoria',
                'ordering': ['category', 'sequence_num', 'from_date'],
                'unique_together': {('product', 'category', 'from_date')},
            },
        ),
        migrations.AddField(
            model_name='product',
            name='categories',
            field=models.ManyToManyField(blank=True, related_name='products', through='catalog.CategoryMembership', to='catalog.category', verbose_name='Categorias'),
        ),
        migrations.CreateModel(
            name='ProductAssociation',
            fields=[
                ('id', id_field()),
                ('from_date', from_date_field()),
                ('thru_date', thru_date_field()),
                ('association_type', models.CharField(choices=[('PRODUCT_VARIANT', 'Variante'), ('PRODUCT_COMPLEMENT', 'Complemento'), ('PRODUCT_ACCESSORY', 'Acessório'), ('PRODUCT_UPGRADE', 'Upgrade'), ('PRODUCT_OBSOLESCENCE', 'Substituto')], default='PRODUCT_VARIANT', max_length=30, verbose_name='Tipo de associação')),
                ('sequence_num', models.IntegerField(blank=True, null=True)),
                ('quantity', models.DecimalField(blank=True, decimal_places=6, max_digits=18, null=True, verbose_name='Quantidade')),
                ('product', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='associations', to='catalog.product', verbose_name='Produto')),
                ('product_to', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='reverse_associations', to='catalog.product', verbose_name='Produto associado')),
            ],
            options={
                'verbose_name': 'Associação de Produto',
                'verbose_name_plural': 'Associações de Produtos',
                'ordering': ['product', 'sequence_num', 'from_date'],
                'unique_together': {('product', 'product_to', 'association_type', 'from_date')},
            },
        ),
        migrations.CreateModel(
            name='ProductContent',
            fields=[
                ('id', id_field()),
                ('from_date', from_date_field()),
                ('thru_date', thru_date_field()),
                ('content_id', models.CharField(max_length=100, verbose_name='Conteúdo')),
                ('content_type', models.CharField(max_length=60, verbose_name='Tipo de conteúdo')),
                ('sequence_num', models.IntegerField(blank=True, null=True)),
                ('product', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='contents', to='catalog.product', verbose_name='Produto')),
            ],
            options={
                'verbose_name': 'Conteúdo do Produto',
                'verbose_name_plural': 'Conteúdos dos Produtos',
                'unique_together': {('product', 'content_id', 'content_type', 'from_date')},
            },
        ),
        migrations.CreateModel(
            name='ProductPrice',
            fields=[
                ('id', id_field()),
                ('from_date', from_date_field()),
                ('thru_date', thru_date_field()),
                ('price_type', models.CharField(default='DEFAULT_PRICE', max_length=60, verbose_name='Tipo de preço')),
                ('currency', models.CharField(default='BRL', max_length=3, verbose_name='Moeda')),
                ('price', models.DecimalField(decimal_places=3, max_digits=18, verbose_name='Preço')),
                ('product', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='prices', to='catalog.product', verbose_name='Produto')),
            ],
            options={
                'verbose_name': 'Preço do Produto',
                'verbose_name_plural': 'Preços dos Produtos',
                'unique_together': {('product', 'price_type', 'currency', 'from_date')},
            },
        ),
        migrations.CreateModel(
            name='GoodIdentification',
            fields=[
                ('id', id_field()),
                ('identification_type', models.CharField(max_length=60, verbose_name='Tipo de identificação')),
                ('id_value', models.CharField(max_length=255, verbose_name='Valor')),
                ('product', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='good_identifications', to='catalog.product', verbose_name='Produto')),
            ],
            options={
                'verbose_name': 'Identificação do Produto',
                'verbose_name_plural': 'Identificações dos Produtos',
                'unique_together': {('product', 'identification_type')},
            },
        ),
        migrations.CreateModel(
            name='ProductAttribute',
            fields=[
                ('id', id_field()),
                ('attr_name', models.CharField(max_length=60, verbose_name='Atributo')),
                ('attr_value', models.CharField(blank=True, max_length=255, verbose_name='Valor')),
                ('product', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='attributes', to='catalog.product', verbose_name='Produto')),
            ],
            options={
                'verbose_name': 'Atributo do Produto',
                'verbose_name_plural': 'Atributos dos Produtos',
                'unique_together': {('product', 'attr_name')},
            },
        ),
        migrations.CreateModel(
            name='ProductKeyword',
            fields=[
                ('id', id_field()),
                ('keyword', models.CharField(max_length=60, verbose_name='Palavra-chave')),
                ('relevancy_weight', models.IntegerField(default=1)),
                ('product', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='keywords', to='catalog.product', verbose_name='Produto')),
            ],
            options={
                'verbose_name': 'Palavra-chave',
                'verbose_name_plural': 'Palavras-chave',
                'unique_together': {('product', 'keyword')},
            },
        ),
        migrations.CreateModel(
            name='FeatureApplication',
            fields=[
                ('id', id_field()),
                ('from_date', from_date_field()),
                ('thru_date', thru_date_field()),
                ('application_type', models.CharField(choices=[('STANDARD_FEATURE', 'Padrão'), ('SELECTABLE_FEATURE', 'Selecionável'), ('DISTINGUISHING_FEAT', 'Distintiva')], default='STANDARD_FEATURE', max_length=20, verbose_name='Tipo de aplicação')),
                ('sequence_num', models.IntegerField(blank=True, null=True)),
                ('feature', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='applications', to='catalog.feature', verbose_name='Característica')),
                ('product', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='feature_applications', to='catalog.product', verbose_name='Produto')),
            ],
            options={
                'verbose_name': 'Característica do Produto',
                'verbose_name_plural': 'Características dos Produtos',
                'ordering': ['product', 'sequence_num'],
                'unique_together': {('product', 'feature', 'from_date')},
            },
        ),
        migrations.CreateModel(
            name='FeatureGroup',
            fields=[
                ('id', id_field()),
                ('group_id', models.CharField(max_length=60, unique=True, verbose_name='Identificador')),
                ('description', models.CharField(blank=True, max_length=255, verbose_name='Descrição')),
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='Criado em')),
                ('feature_type', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='feature_groups', to='catalog.featuretype', verbose_name='Tipo de Característica')),
                ('source_category', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='derived_feature_groups', to='catalog.category', verbose_name='Categoria de origem')),
            ],
            options={
                'verbose_name': 'Grupo de Características',
                'verbose_name_plural': 'Grupos de Características',
                'ordering': ['group_id'],
            },
        ),
        migrations.CreateModel(
            name='FeatureGroupCategoryLink',
            fields=[
                ('id', id_field()),
                ('from_date', from_date_field()),
                ('thru_date', thru_date_field()),
                ('category', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='feature_group_links', to='catalog.category', verbose_name='Categoria')),
                ('feature_group', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='category_links', to='catalog.featuregroup', verbose_name='Grupo')),
            ],
            options={
                'verbose_name': 'Grupo da Categoria',
                'verbose_name_plural': 'Grupos das Categorias',
                'ordering': ['category', 'feature_group'],
                'unique_together': {('feature_group', 'category', 'from_date')},
            },
        ),
        migrations.CreateModel(
            name='FeatureGroupFeatureLink',
            fields=[
                ('id', id_field()),
                ('from_date', from_date_field()),
                ('thru_date', thru_date_field()),
                ('sequence_num', models.IntegerField(blank=True, null=True)),
                ('feature', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='feature_group_links', to='catalog.feature', verbose_name='Característica')),
                ('feature_group', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='feature_links', to='catalog.featuregroup', verbose_name='Grupo')),
            ],
            options={
                'verbose_name': 'Membro do Grupo',
                'verbose_name_plural': 'Membros do Grupo',
                'ordering': ['sequence_num'],
                'unique_together': {('feature_group', 'feature', 'from_date')},
            },
        ),
        migrations.AddField(
            model_name='featuregroup',
            name='categories',
            field=models.ManyToManyField(related_name='feature_groups', through='catalog.FeatureGroupCategoryLink', to='catalog.category', verbose_name='Categorias'),
        ),
        migrations.AddField(
            model_name='featuregroup',
            name='features',
            field=models.ManyToManyField(related_name='feature_groups', through='catalog.FeatureGroupFeatureLink', to='catalog.feature', verbose_name='Características'),
        ),
        migrations.CreateModel(
            name='HistoricalProduct',
            fields=[
                ('id', models.BigIntegerField(auto_created=True, blank=True, db_index=True, verbose_name='ID')),
                ('internal_name', models.CharField(blank=True, max_length=255, verbose_name='Nome interno')),
                ('name', models.CharField(blank=True, max_length=255, verbose_name='Nome')),
                ('slug', models.SlugField(max_length=255, verbose_name='Slug')),
                ('description', models.TextField(blank=True, verbose_name='Descrição')),
                ('long_description', models.TextField(blank=True, verbose_name='Descrição longa')),
                ('is_virtual', models.BooleanField(default=False, verbose_name='Virtual')),
                ('is_variant', models.BooleanField(default=False, verbose_name='Variante')),
                ('introduction_date', models.DateTimeField(blank=True, null=True, verbose_name='Data de introdução')),
                ('sales_discontinuation_date', models.DateTimeField(blank=True, db_index=True, null=True, verbose_name='Data de descontinuação de venda')),
                ('small_image_url', models.CharField(blank=True, max_length=2000, null=True)),
                ('medium_image_url', models.CharField(blank=True, max_length=2000, null=True)),
                ('large_image_url', models.CharField(blank=True, max_length=2000, null=True)),
                ('detail_image_url', models.CharField(blank=True, max_length=2000, null=True)),
                ('created_at', models.DateTimeField(blank=True, editable=False, verbose_name='Criado em')),
                ('updated_at', models.DateTimeField(blank=True, editable=False, verbose_name='Atualizado em')),
                ('history_id', models.AutoField(primary_key=True, serialize=False)),
                ('history_date', models.DateTimeField(db_index=True)),
                ('history_change_reason', models.CharField(max_length=100, null=True)),
                ('history_type', models.CharField(choices=[('+', 'Created'), ('~', 'Changed'), ('-', 'Deleted')], max_length=1)),
                ('history_user', models.ForeignKey(null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'historical Produto',
                'verbose_name_plural': 'historical Produtos',
                'ordering': ('-history_date', '-history_id'),
                'get_latest_by': ('history_date', 'history_id'),
            },
            bases=(simple_history.models.HistoricalChanges, models.Model),
        ),
    ]
